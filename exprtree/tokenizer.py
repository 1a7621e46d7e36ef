import logging
from dataclasses import dataclass
from typing import Optional, Union
from .types import Operation, Span, TokenType
from .source_map import SourceMap
from .errors import LexicalError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Token:
    kind: TokenType
    raw: str
    span: Span
    value: Optional[Union[int, Operation]] = None

    def __repr__(self):
        match self.kind:
            case TokenType.Number:
                return f"Number({self.value})"
            case TokenType.Operator:
                return f"Operator({self.value.name})"
            case _:
                return self.kind.name


class Tokenizer:
    tokens: list[Token]
    text: str
    index: int
    sm: SourceMap
    SINGLE: dict[str, TokenType] = {
        "+": TokenType.Operator,
        "-": TokenType.Operator,
        "*": TokenType.Operator,
        "/": TokenType.Operator,
        "(": TokenType.LParen,
        ")": TokenType.RParen,
    }

    def __init__(self, text: str):
        self.text = text
        self.sm = SourceMap(text)
        self.tokens = []
        self.index = 0

    def is_num(self, ch: str):
        return ch >= "0" and ch <= "9"

    def bump(self) -> str:
        tmp = self.peek()
        self.index += 1
        return tmp

    def peek(self) -> str:
        if self.index >= len(self.text):
            return "\0"
        return self.text[self.index]

    def add(self, kind: TokenType, raw: str, span: Span, value=None):
        self.tokens.append(Token(kind, raw, span, value))

    def tokenize(self) -> list[Token]:
        self.tokens = []
        self.index = 0
        while self.index < len(self.text):
            ch = self.peek()
            if ch.isspace():
                _ = self.bump()
                continue

            if self.is_num(ch):
                start = self.index
                value = 0
                while self.is_num(self.peek()):
                    value = value * 10 + (ord(self.bump()) - ord("0"))
                self.add(TokenType.Number, self.text[start:self.index],
                         Span(start, self.index), value)
                continue

            kind = self.SINGLE.get(ch)
            if kind is not None:
                value = Operation(ch) if kind == TokenType.Operator else None
                self.add(kind, ch, Span(self.index, self.index + 1), value)
                _ = self.bump()
                continue

            raise LexicalError(ch, self.index, self.sm)

        logger.debug("tokenized %d chars into %d tokens",
                     len(self.text), len(self.tokens))
        return self.tokens

    def _escape(self, s: str) -> str:
        return s.encode("unicode_escape").decode("ascii")

    def tokens_debug(self) -> str:
        out = []
        for t in self.tokens:
            (sline, scol), (eline, ecol) = self.sm.span_to_lc(t.span)
            out.append(
                f'Token {{ kind: {t.kind.name}, raw: "{self._escape(t.raw)}", '
                f"span: [{t.span.start},{t.span.end}) @ {sline}:{scol}-{eline}:{ecol} }}"
            )
        return "\n".join(out)

    def tokens_pretty_gutter(self) -> str:
        lines = self.text.split("\n")
        pieces = []
        for ln, line in enumerate(lines, start=1):
            line_start = self.sm.line_starts[ln - 1]
            carets = [" "] * len(line)
            for t in self.tokens:
                s = max(t.span.start, line_start) - line_start
                e = min(t.span.end - line_start, len(line))
                for i in range(s, e):
                    carets[i] = "^"
            pieces.append(f"{ln:>4} | {line}")
            if any(c != " " for c in carets):
                pieces.append("     | " + "".join(carets))
        pieces.append("")
        pieces.append(self.tokens_debug())
        return "\n".join(pieces)


def tokenize(text: str) -> list[Token]:
    return Tokenizer(text).tokenize()

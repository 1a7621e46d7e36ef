import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol
from .tokenizer import Token, Tokenizer
from .types import Operation, Span, TokenType
from .source_map import SourceMap
from .errors import PositionOutOfRange, UnexpectedToken, UnterminatedGroup

logger = logging.getLogger(__name__)


# expression := term (("+" | "-") term)*
# term       := factor (("*" | "/") factor)*
# factor     := <number> | "(" expression ")"

class Node(Protocol):
    span: Span


@dataclass(frozen=True)
class Literal(Node):
    value: int
    span: Span = field(default=Span(0, 0), compare=False)


@dataclass(frozen=True)
class BinOp(Node):
    op: Operation
    left: Node
    right: Node
    span: Span = field(default=Span(0, 0), compare=False)


class Parser:
    tokens: list[Token]
    index: int
    sm: Optional[SourceMap]

    def __init__(self, tokens: list[Token], sm: Optional[SourceMap] = None):
        self.tokens = tokens
        self.index = 0
        self.sm = sm

    def at_end(self) -> bool:
        return self.index >= len(self.tokens)

    def end_span(self) -> Span:
        if self.sm is not None:
            return self.sm.end_span()
        if self.tokens:
            end = self.tokens[-1].span.end
            return Span(end, end)
        return Span(0, 0)

    def peek(self) -> Token:
        if self.at_end():
            raise PositionOutOfRange(self.index, self.end_span(), self.sm)
        return self.tokens[self.index]

    def advance(self) -> Token:
        tmp = self.peek()
        self.index += 1
        return tmp

    def at(self, kind: TokenType, *ops: Operation) -> bool:
        if self.at_end():
            return False
        tok = self.tokens[self.index]
        if tok.kind != kind:
            return False
        return not ops or tok.value in ops

    def expect_close(self, lparen: Token) -> Token:
        if not self.at(TokenType.RParen):
            raise UnterminatedGroup(lparen, self.sm)
        return self.advance()

    def parse_expression(self) -> Node:
        left = self.parse_term()
        while self.at(TokenType.Operator, Operation.Add, Operation.Subtract):
            op = self.advance()
            right = self.parse_term()
            left = BinOp(op.value, left, right,
                         span=Span(left.span.start, right.span.end))
        if not self.at_end() and not self.at(TokenType.RParen):
            raise UnexpectedToken(self.peek(), self.sm)
        return left

    def parse_term(self) -> Node:
        left = self.parse_factor()
        while self.at(TokenType.Operator, Operation.Multiply, Operation.Divide):
            op = self.advance()
            right = self.parse_factor()
            left = BinOp(op.value, left, right,
                         span=Span(left.span.start, right.span.end))
        return left

    def parse_factor(self) -> Node:
        tok = self.peek()
        match tok.kind:
            case TokenType.Number:
                tok = self.advance()
                return Literal(tok.value, span=tok.span)
            case TokenType.LParen:
                lparen = self.advance()
                inner = self.parse_expression()
                self.expect_close(lparen)
                return inner
            case _:
                raise UnexpectedToken(tok, self.sm)

    def parse(self) -> Node:
        self.index = 0
        root = self.parse_expression()
        if not self.at_end():
            # only a stray ')' can be left over here
            raise UnexpectedToken(self.peek(), self.sm)
        logger.debug("parsed %d tokens into %r", len(self.tokens), root)
        return root


def parse(tokens: list[Token], sm: Optional[SourceMap] = None) -> Node:
    return Parser(tokens, sm).parse()


def build_ast(text: str) -> Node:
    tokenizer = Tokenizer(text)
    tokens = tokenizer.tokenize()
    return Parser(tokens, tokenizer.sm).parse()

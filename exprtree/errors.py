from __future__ import annotations
from typing import TYPE_CHECKING, Optional
from .types import Span

if TYPE_CHECKING:
    from .source_map import SourceMap
    from .tokenizer import Token


class ExprError(Exception):
    """Base class for every failure raised while building an AST.

    `msg` is the short description, `span` where it happened. When a
    SourceMap is given, str(err) also carries the caret-marked source line.
    """
    msg: str
    span: Optional[Span]

    def __init__(self, msg: str, span: Optional[Span] = None,
                 sm: Optional["SourceMap"] = None):
        self.msg = msg
        self.span = span
        if sm is not None and span is not None:
            super().__init__(sm.to_err(span, msg))
        else:
            super().__init__(msg)

    @property
    def kind(self) -> str:
        return type(self).__name__


class LexicalError(ExprError):
    def __init__(self, char: str, offset: int, sm: Optional["SourceMap"] = None):
        self.char = char
        super().__init__(f"invalid character {char!r}",
                         Span(offset, offset + 1), sm)


class ParseError(ExprError):
    pass


class UnexpectedToken(ParseError):
    def __init__(self, token: "Token", sm: Optional["SourceMap"] = None):
        self.token = token
        super().__init__(f"unexpected token {token.raw!r}", token.span, sm)


class UnterminatedGroup(ParseError):
    def __init__(self, opening: "Token", sm: Optional["SourceMap"] = None):
        self.opening = opening
        super().__init__("expected ')' to close this '('", opening.span, sm)


class PositionOutOfRange(ParseError):
    def __init__(self, position: int, span: Span, sm: Optional["SourceMap"] = None):
        self.position = position
        super().__init__(
            f"unexpected end of input (token {position})", span, sm)

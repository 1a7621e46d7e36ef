from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Span:
    start: int
    end: int


class Operation(Enum):
    Add = "+"
    Subtract = "-"
    Multiply = "*"
    Divide = "/"


class TokenType(Enum):
    Number = "Number"
    Operator = "Operator"
    LParen = "LParen"
    RParen = "RParen"

import pytest
from exprtree.parser import BinOp, Literal, Parser, build_ast, parse
from exprtree.tokenizer import Tokenizer, tokenize
from exprtree.types import Operation, Span
from exprtree.errors import (
    ExprError,
    LexicalError,
    ParseError,
    PositionOutOfRange,
    UnexpectedToken,
    UnterminatedGroup,
)

Add, Sub, Mul, Div = (Operation.Add, Operation.Subtract,
                      Operation.Multiply, Operation.Divide)


def test_parse_factor():
    """
    factor = <number> | "(" expression ")"
    """
    assert build_ast("5") == Literal(5)
    assert build_ast("(5)") == Literal(5)
    assert build_ast("((((5))))") == Literal(5)


def test_precedence():
    assert build_ast("2+3*4") == BinOp(Add, Literal(2), BinOp(Mul, Literal(3), Literal(4)))
    assert build_ast("2*3+4") == BinOp(Add, BinOp(Mul, Literal(2), Literal(3)), Literal(4))
    assert build_ast("8-6/2") == BinOp(Sub, Literal(8), BinOp(Div, Literal(6), Literal(2)))


def test_left_associativity():
    assert build_ast("8-3-2") == BinOp(Sub, BinOp(Sub, Literal(8), Literal(3)), Literal(2))
    assert build_ast("8/4/2") == BinOp(Div, BinOp(Div, Literal(8), Literal(4)), Literal(2))
    assert build_ast("1+2-3") == BinOp(Sub, BinOp(Add, Literal(1), Literal(2)), Literal(3))
    assert build_ast("2*3/4") == BinOp(Div, BinOp(Mul, Literal(2), Literal(3)), Literal(4))


def test_grouping_overrides_precedence():
    assert build_ast("(2+3)*4") == BinOp(Mul, BinOp(Add, Literal(2), Literal(3)), Literal(4))
    assert build_ast("8-(3-2)") == BinOp(Sub, Literal(8), BinOp(Sub, Literal(3), Literal(2)))


def test_mixed_chain():
    parsed = build_ast("1+2*3-4/2")
    assert parsed == BinOp(
        Sub,
        BinOp(Add, Literal(1), BinOp(Mul, Literal(2), Literal(3))),
        BinOp(Div, Literal(4), Literal(2)),
    )


def test_multiplication_never_outer_at_same_level():
    for text in ["1*2+3", "1+2*3", "1*2-3*4", "6/3-1", "1-6/3*2"]:
        parsed = build_ast(text)
        assert isinstance(parsed, BinOp)
        assert parsed.op in (Add, Sub), text


def test_whitespace_insensitive():
    assert build_ast("1+2") == build_ast(" 1 + 2 ")
    assert build_ast("(2+3)*4") == build_ast("( 2 +\t3 ) *   4")


def test_spans():
    parsed = build_ast("12 + 3*4")
    assert parsed.span == Span(0, 8)
    assert parsed.left.span == Span(0, 2)
    assert parsed.right.span == Span(5, 8)


def test_parse_from_tokens():
    tokens = tokenize("1+2")
    assert parse(tokens) == BinOp(Add, Literal(1), Literal(2))
    # tokens are left untouched
    assert parse(tokens) == parse(tokens)
    assert len(tokens) == 3


def test_deep_nesting():
    depth = 50
    parsed = build_ast("(" * depth + "1" + "+1)" * depth)
    for _ in range(depth):
        assert isinstance(parsed, BinOp)
        assert parsed.right == Literal(1)
        parsed = parsed.left
    assert parsed == Literal(1)


def test_empty_input():
    with pytest.raises(PositionOutOfRange) as excinfo:
        build_ast("")
    assert excinfo.value.position == 0


def test_trailing_operator():
    with pytest.raises(PositionOutOfRange) as excinfo:
        build_ast("1+")
    assert excinfo.value.position == 2
    assert excinfo.value.span == Span(2, 2)


def test_unterminated_group():
    with pytest.raises(UnterminatedGroup) as excinfo:
        build_ast("(1+2")
    assert excinfo.value.opening.span == Span(0, 1)
    with pytest.raises(UnterminatedGroup):
        build_ast("((1)")


def test_unexpected_token():
    cases = {
        "+1": "+",
        "1++2": "+",
        "1*/2": "/",
        "()": ")",
        "1 2": "2",
        "1 (2)": "(",
        "(1)(2)": "(",
        "1)": ")",
        "(1+2))": ")",
        ")": ")",
    }
    for text, raw in cases.items():
        with pytest.raises(UnexpectedToken) as excinfo:
            build_ast(text)
        assert excinfo.value.token.raw == raw, text


def test_lexical_error_propagates():
    with pytest.raises(LexicalError) as excinfo:
        build_ast("1@2")
    assert excinfo.value.char == "@"


def test_error_hierarchy():
    for text in ["", "1+", "(1", "1 1"]:
        with pytest.raises(ParseError):
            build_ast(text)
    with pytest.raises(ExprError):
        build_ast("?")


def test_error_message_with_source_map():
    tokenizer = Tokenizer("1 + * 2")
    parser = Parser(tokenizer.tokenize(), tokenizer.sm)
    with pytest.raises(UnexpectedToken) as excinfo:
        parser.parse()
    err = excinfo.value
    assert err.msg == "unexpected token '*'"
    assert str(err).splitlines() == [
        "At 1:5-1:6",
        "    1 | 1 + * 2",
        "      |     ^ unexpected token '*'",
    ]


def test_error_message_without_source_map():
    with pytest.raises(UnterminatedGroup) as excinfo:
        parse(tokenize("(1"))
    assert str(excinfo.value) == "expected ')' to close this '('"

import argparse
import logging
import sys
from typing import Optional
from .tokenizer import Tokenizer
from .parser import Parser
from .debug_ast import render_ast
from .errors import ExprError

logger = logging.getLogger("exprtree")


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="exprtree",
        description="Parse an arithmetic expression and print its syntax tree.")
    ap.add_argument("expression", nargs="?",
                    help="expression to parse (default: one line from stdin)")
    ap.add_argument("--tokens", action="store_true",
                    help="print the token listing before the tree")
    ap.add_argument("--spans", action="store_true",
                    help="show source spans next to each node")
    ap.add_argument("-v", "--verbose", action="store_true",
                    help="enable debug logging on stderr")
    return ap


def read_expression() -> str:
    if sys.stdin.isatty():
        print("Enter an expression to parse:")
    line = sys.stdin.readline()
    return line.rstrip("\r\n")


def run(text: str, *, show_tokens: bool = False, show_spans: bool = False) -> int:
    try:
        tokenizer = Tokenizer(text)
        tokens = tokenizer.tokenize()
        if show_tokens:
            print(tokenizer.tokens_pretty_gutter())
            print()
        parsed = Parser(tokens, tokenizer.sm).parse()
        lines = list(render_ast(parsed, show_spans=show_spans))
    except ExprError as err:
        logger.debug("parse failed: %s", err.msg)
        print(f"error[{err.kind}]: {err}", file=sys.stderr)
        return 1
    except RecursionError:
        logger.debug("recursion limit hit on %d chars of input", len(text))
        print("error[RecursionError]: expression is nested too deeply",
              file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    text = args.expression if args.expression is not None else read_expression()
    return run(text, show_tokens=args.tokens, show_spans=args.spans)


if __name__ == "__main__":
    sys.exit(main())

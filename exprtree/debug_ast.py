# debug_ast.py
from typing import Iterator
from .parser import BinOp, Literal, Node
from .types import Span

INDENT = "|   "


def render_ast(node: Node, depth: int = 0, *, show_spans: bool = False) -> Iterator[str]:
    """Yield one line per node, pre-order: a node, then its left and right subtrees."""
    prefix = INDENT * depth
    match node:
        case Literal(value=value):
            yield prefix + f"- Literal({value})" + _span_suffix(node.span, show_spans)
        case BinOp(op=op, left=left, right=right):
            yield prefix + f"- BinOp({op.name})" + _span_suffix(node.span, show_spans)
            yield from render_ast(left, depth + 1, show_spans=show_spans)
            yield from render_ast(right, depth + 1, show_spans=show_spans)
        case _:
            raise TypeError(f"not an AST node: {node!r}")


def format_ast(root: Node, *, show_spans: bool = False) -> str:
    return "\n".join(render_ast(root, show_spans=show_spans))


def _span_suffix(span: Span, show_spans: bool) -> str:
    if not show_spans:
        return ""
    return f" [{span.start}..{span.end}]"

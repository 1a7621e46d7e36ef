from bisect import bisect_right
from .types import Span


class SourceMap:
    def __init__(self, text: str):
        self.text = text
        self.line_starts = [0]
        for i, ch in enumerate(text):
            if ch == '\n':
                self.line_starts.append(i + 1)

    def offset_to_line_col(self, off: int) -> tuple[int, int]:
        # 1-based line/col
        li = bisect_right(self.line_starts, off) - 1
        return (li + 1, off - self.line_starts[li] + 1)

    def span_to_lc(self, span: Span) -> tuple[tuple[int, int], tuple[int, int]]:
        return (self.offset_to_line_col(span.start),
                self.offset_to_line_col(span.end))

    def end_span(self) -> Span:
        return Span(len(self.text), len(self.text))

    def to_err(self, span: Span, msg: str) -> str:
        (sline, scol), (eline, ecol) = self.span_to_lc(span)
        lines = self.text.split("\n")

        def get_line(ln: int) -> str:
            return lines[ln - 1] if 1 <= ln <= len(lines) else ""

        parts: list[str] = []
        header = f"At {sline}:{scol}" + (f"-{eline}:{ecol}" if (sline, scol) != (eline, ecol) else "")
        parts.append(header)

        line = get_line(sline)
        parts.append(f" {sline:>4} | {line}")
        width = max(1, ecol - scol) if sline == eline else max(1, len(line) - (scol - 1))
        caret = " " * (scol - 1) + "^" * width + f" {msg}"
        parts.append("      | " + caret)
        return "\n".join(parts)

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from yes_core.glyphs import QUOTE


class LiteralSpanError(ValueError):
    pass


@dataclass(frozen=True)
class LiteralSpan:
    start: str
    end: str

    def __post_init__(self) -> None:
        if not self.start or not self.end:
            raise LiteralSpanError("Literal start and end tokens must be non-null.")
        if len(self.start) != 1 or len(self.end) != 1:
            raise LiteralSpanError(f"literal glyphs must be single characters: {self.start!r} {self.end!r}")


DEFAULT_QUOTE_SPAN = LiteralSpan(QUOTE, QUOTE)

SpanLike = Union[LiteralSpan, Tuple[str, str], Sequence[str], str]


def as_span(value: SpanLike) -> LiteralSpan:
    if isinstance(value, LiteralSpan):
        return value
    if isinstance(value, str):
        # Two-glyph shorthand, e.g. "[]" or "()".
        if len(value) != 2:
            raise LiteralSpanError(f"expected a two-glyph literal, got {value!r}")
        return LiteralSpan(value[0], value[1])
    if value is None or len(value) != 2:
        raise LiteralSpanError(f"expected a (start, end) pair, got {value!r}")
    start, end = value
    return LiteralSpan(start, end)


def build_span_table(extra: Optional[Iterable[SpanLike]] = None) -> List[LiteralSpan]:
    """The default quote span first, then caller spans in order (duplicates dropped)."""
    table: List[LiteralSpan] = [DEFAULT_QUOTE_SPAN]
    for item in extra or ():
        span = as_span(item)
        if span not in table:
            table.append(span)
    return table


def span_opening_at(ch: str, spans: Sequence[LiteralSpan]) -> Optional[LiteralSpan]:
    for span in spans:
        if span.start == ch:
            return span
    return None

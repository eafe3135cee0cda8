from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from loguru import logger

from yes_core.classifier import classify_line
from yes_core.element import Element
from yes_core.glyphs import BACKSLASH, ElementType, ErrorKind
from yes_core.literal import LiteralSpan, SpanLike, build_span_table


_LINE_SPLIT_RE = re.compile(r"\r?\n")


def _strip_bom(text: str) -> str:
    return (text or "").lstrip("\ufeff")


def split_lines(buffer: str) -> List[str]:
    return _LINE_SPLIT_RE.split(_strip_bom(buffer))


@dataclass(frozen=True)
class ErrorRecord:
    line: int
    kind: ErrorKind

    @property
    def message(self) -> str:
        return self.kind.message

    def __str__(self) -> str:
        return f"line {self.line}: {self.kind.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {"line": self.line, "kind": self.kind.name, "message": self.kind.message}


@dataclass
class DocumentResult:
    elements: List[Element] = field(default_factory=list)
    errors: List[ErrorRecord] = field(default_factory=list)

    def visible_errors(self, *, hide_blank_lines: bool = True) -> List[ErrorRecord]:
        if not hide_blank_lines:
            return list(self.errors)
        return [e for e in self.errors if e.kind != ErrorKind.EOL_NO_DATA]

    def render(self, *, include_errors: bool = False, hide_blank_lines: bool = True) -> str:
        out: List[str] = []
        for el in self.elements:
            for attr in el.attributes:
                out.append(attr.render())
            out.append(el.render())
        if include_errors:
            for err in self.visible_errors(hide_blank_lines=hide_blank_lines):
                out.append(f"Error: {err}")
        return "\n".join(out)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "elements": [el.to_dict() for el in self.elements],
            "errors": [err.to_dict() for err in self.errors],
        }


def join_continuations(lines: Iterable[str]) -> Iterator[Tuple[int, str]]:
    """
    Yields (line_no, logical_line). A trailing backslash continues the line
    onto the next physical line; the reported line number is the one of the
    physical line that ends the group.
    """
    buf: Optional[List[str]] = None
    line_no = 0
    for raw in lines:
        line_no += 1
        if raw.endswith(BACKSLASH):
            if buf is None:
                buf = []
            buf.append(raw[:-1])
            continue
        if buf is not None:
            buf.append(raw)
            yield line_no, "".join(buf)
            buf = None
            continue
        yield line_no, raw

    # Input ended mid-continuation.
    if buf is not None:
        yield line_no, "".join(buf)


def hoist_globals(elements: Sequence[Element]) -> List[Element]:
    globals_ = sorted((e for e in elements if e.type == ElementType.GLOBAL), key=lambda e: e.source_line)
    others = sorted((e for e in elements if e.type != ElementType.GLOBAL), key=lambda e: e.source_line)
    return globals_ + others


class Collector:
    """Per-parse state: pending attributes, collected elements and line errors."""

    def __init__(self, spans: Sequence[LiteralSpan]) -> None:
        self._spans = list(spans)
        self._pending_attrs: List[Element] = []
        self.elements: List[Element] = []
        self.errors: List[ErrorRecord] = []

    @property
    def pending_attributes(self) -> List[Element]:
        return list(self._pending_attrs)

    def handle_line(self, line_no: int, line: str) -> None:
        outcome = classify_line(line, self._spans, line_no=line_no)
        if outcome.error is not None:
            logger.debug(f"line {line_no}: {outcome.error.name} | {outcome.error.message}")
            self.errors.append(ErrorRecord(line=line_no, kind=outcome.error))
            return

        element = outcome.element
        assert element is not None
        if element.type == ElementType.ATTRIBUTE:
            self._pending_attrs.append(element)
            return
        if element.type == ElementType.STANDARD:
            element.set_attributes(self._pending_attrs)
            self._pending_attrs = []
        # Globals and comments leave pending attributes for the next standard element.
        self.elements.append(element)

    def finish(self) -> DocumentResult:
        if self._pending_attrs:
            logger.debug(f"{len(self._pending_attrs)} attribute(s) left without a standard element")
        return DocumentResult(elements=hoist_globals(self.elements), errors=list(self.errors))


def parse(buffer: str, literal_spans: Optional[Iterable[SpanLike]] = None) -> DocumentResult:
    spans = build_span_table(literal_spans)
    collector = Collector(spans)
    for line_no, line in join_continuations(split_lines(buffer)):
        collector.handle_line(line_no, line)
    result = collector.finish()
    logger.debug(f"parsed {len(result.elements)} elements, {len(result.errors)} errors")
    return result


def parse_file(
    path: Union[str, Path],
    literal_spans: Optional[Iterable[SpanLike]] = None,
    *,
    encoding: str = "utf-8",
) -> DocumentResult:
    in_path = Path(path)
    logger.info(f"parse file | path={in_path} encoding={encoding}")
    return parse(in_path.read_text(encoding=encoding), literal_spans)

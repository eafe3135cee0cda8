from __future__ import annotations

import json
import os
from pathlib import Path
from typing import List, Tuple, Union

from pydantic import BaseModel, Field, field_validator

from yes_core.literal import LiteralSpan, build_span_table


def _env_first(*names: str) -> str:
    for n in names:
        v = os.getenv(n, "").strip()
        if v:
            return v
    return ""


def parse_span_list(raw: str) -> List[Tuple[str, str]]:
    """`"[],(),{}"` -> [("[", "]"), ("(", ")"), ("{", "}")]"""
    out: List[Tuple[str, str]] = []
    for part in (raw or "").split(","):
        part = part.strip()
        if not part:
            continue
        if len(part) != 2:
            raise ValueError(f"invalid literal span {part!r} (expected two glyphs, e.g. [])")
        out.append((part[0], part[1]))
    return out


class ParserConfig(BaseModel):
    # Extra literal spans (start, end); the double-quote span is always included.
    literal_spans: List[Tuple[str, str]] = Field(default_factory=list)
    # Encoding used when reading documents from disk.
    encoding: str = Field(default="utf-8")
    # Drop EOL_NO_DATA (blank line) diagnostics from reports.
    hide_blank_lines: bool = Field(default=True)

    @field_validator("literal_spans")
    @classmethod
    def _single_glyphs(cls, value: List[Tuple[str, str]]) -> List[Tuple[str, str]]:
        for start, end in value:
            if len(start) != 1 or len(end) != 1:
                raise ValueError(f"literal span glyphs must be single characters: {start!r} {end!r}")
        return value

    def spans(self) -> List[LiteralSpan]:
        return build_span_table(self.literal_spans)

    @classmethod
    def from_env(cls) -> "ParserConfig":
        data = {}
        spans = _env_first("YES_LITERAL_SPANS")
        if spans:
            data["literal_spans"] = parse_span_list(spans)
        encoding = _env_first("YES_ENCODING")
        if encoding:
            data["encoding"] = encoding
        hide = _env_first("YES_HIDE_BLANK_LINES")
        if hide:
            data["hide_blank_lines"] = hide not in {"0", "false", "False"}
        return cls.model_validate(data)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ParserConfig":
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError("config file must contain a JSON object")
        return cls.model_validate(raw)

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from yes_core.glyphs import EQUAL, QUOTE, WHITESPACE


def contains_whitespace(text: Optional[str]) -> bool:
    if not isinstance(text, str):
        return False
    return any(ch in WHITESPACE for ch in text)


def _quoted(text: str) -> str:
    if contains_whitespace(text):
        return f"{QUOTE}{text}{QUOTE}"
    return text


@dataclass(frozen=True)
class KeyVal:
    key: Optional[str]
    val: str

    def __post_init__(self) -> None:
        if self.key is not None and not self.key.strip(WHITESPACE):
            raise ValueError("KeyVal key must not be empty (use key=None for a nameless value)")

    @property
    def is_named(self) -> bool:
        return self.key is not None

    def matches(self, key: Optional[str]) -> bool:
        if self.key is None or key is None:
            return False
        return self.key.lower() == key.lower()

    def render(self) -> str:
        if self.key is None:
            return _quoted(self.val)
        return f"{_quoted(self.key)}{EQUAL}{_quoted(self.val)}"

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "val": self.val}

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, TypeVar

from yes_core.glyphs import ElementType
from yes_core.keyval import KeyVal


T = TypeVar("T")

# Leading-substring numeric parses, in the spirit of JavaScript parseInt/parseFloat.
_INT_PREFIX_RE = re.compile(r"^[ \t]*([+-]?\d+)")
_NUMBER_PREFIX_RE = re.compile(
    r"^[ \t]*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)


class NotAnAttributeError(AssertionError):
    pass


def _parse_int_prefix(text: Optional[str]) -> Optional[int]:
    if text is None:
        return None
    m = _INT_PREFIX_RE.match(text)
    if not m:
        return None
    return int(m.group(1))


def _parse_number_prefix(text: Optional[str]) -> Optional[float]:
    if text is None:
        return None
    m = _NUMBER_PREFIX_RE.match(text)
    if not m:
        return None
    raw = m.group(1)
    if raw.lstrip("+-") == "Infinity":
        return -math.inf if raw.startswith("-") else math.inf
    return float(raw)


@dataclass
class Element:
    type: ElementType = ElementType.STANDARD
    identifier: str = ""
    args: List[KeyVal] = field(default_factory=list)
    attributes: List["Element"] = field(default_factory=list)
    source_line: int = 0

    @property
    def text(self) -> str:
        return self.identifier

    @property
    def line(self) -> int:
        return self.source_line

    # --- mutation (collector / classifier only) ---

    def add(self, keyval: KeyVal) -> None:
        self.args.append(keyval)

    def upsert(self, keyval: KeyVal) -> None:
        """
        Named args replace an earlier arg with the same key (case-insensitive),
        keeping its position; everything else is appended.
        """
        if keyval.key is not None:
            for idx, existing in enumerate(self.args):
                if existing.matches(keyval.key):
                    self.args[idx] = keyval
                    return
        self.args.append(keyval)

    def set_attributes(self, attrs: Iterable["Element"]) -> None:
        attributes: List[Element] = []
        for attr in attrs:
            if attr.type != ElementType.ATTRIBUTE:
                raise NotAnAttributeError(
                    f"line {attr.source_line}: {attr.type.value} element {attr.identifier!r} is not an attribute"
                )
            attributes.append(attr)
        self.attributes = attributes

    # --- lookups ---

    def _find(self, key: str) -> Optional[KeyVal]:
        for kv in self.args:
            if kv.matches(key):
                return kv
        return None

    def has_key(self, key: str) -> bool:
        return self._find(key) is not None

    def has_keys(self, keys: Iterable[str]) -> bool:
        return all(self.has_key(k) for k in keys)

    def get(self, key: str, default: Optional[T] = None) -> Any:
        kv = self._find(key)
        if kv is None:
            return default
        return kv.val

    def get_as_int(self, key: str, default: Optional[T] = None) -> Any:
        value = _parse_int_prefix(self.get(key))
        return default if value is None else value

    def get_as_number(self, key: str, default: Optional[T] = None) -> Any:
        value = _parse_number_prefix(self.get(key))
        return default if value is None else value

    def get_as_bool(self, key: str, default: Optional[T] = None) -> Any:
        value = self.get(key)
        if value is None:
            return default
        # Anything but "true" is falsey.
        return value.lower() == "true"

    # --- output ---

    def render_args(self) -> str:
        return ", ".join(kv.render() for kv in self.args)

    def render(self) -> str:
        head = f"{self.type.prefix}{self.identifier}"
        if self.type == ElementType.COMMENT or not self.args:
            return head
        return f"{head} {self.render_args()}"

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "identifier": self.identifier,
            "line": self.source_line,
            "args": [kv.to_dict() for kv in self.args],
            "attributes": [a.to_dict() for a in self.attributes],
        }

from __future__ import annotations

from enum import Enum


EQUAL = "="
AT = "@"
BANG = "!"
HASH = "#"
SPACE = " "
TAB = "\t"
COMMA = ","
QUOTE = '"'
BACKSLASH = "\\"

WHITESPACE = SPACE + TAB


class ElementType(str, Enum):
    STANDARD = "standard"
    GLOBAL = "global"
    COMMENT = "comment"
    ATTRIBUTE = "attribute"

    @property
    def prefix(self) -> str:
        return _PREFIXES.get(self, "")


_PREFIXES = {
    ElementType.GLOBAL: BANG,
    ElementType.ATTRIBUTE: AT,
    ElementType.COMMENT: HASH,
}


class Delimiter(str, Enum):
    COMMA = ","
    SPACE = " "


class ErrorKind(Enum):
    BADTOKEN_AT = "Element using attribute prefix out-of-place."
    BADTOKEN_BANG = "Element using global prefix out-of-place."
    EOL_NO_DATA = "Nothing to parse (EOL)."
    EOL_MISSING_ELEMENT = "Missing element identifier (EOL)."
    EOL_MISSING_ATTRIBUTE = "Missing attribute identifier (EOL)."
    EOL_MISSING_GLOBAL = "Missing global identifier (EOL)."
    UNTERMINATED_QUOTE = "Missing end quote in expression."
    # Reserved for misc. parsing issues; nothing reports it yet.
    RUNTIME = "Unexpected runtime error."

    @property
    def message(self) -> str:
        return self.value

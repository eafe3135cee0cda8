from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from yes_core.element import Element
from yes_core.glyphs import AT, BANG, HASH, QUOTE, ElementType, ErrorKind
from yes_core.literal import LiteralSpan
from yes_core.tokenizer import UnterminatedSpanError, is_whitespace, split_args, trim, unquote


_MISSING_IDENTIFIER = {
    ElementType.STANDARD: ErrorKind.EOL_MISSING_ELEMENT,
    ElementType.ATTRIBUTE: ErrorKind.EOL_MISSING_ATTRIBUTE,
    ElementType.GLOBAL: ErrorKind.EOL_MISSING_GLOBAL,
}


@dataclass(frozen=True)
class LineOutcome:
    element: Optional[Element] = None
    error: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _fail(kind: ErrorKind) -> LineOutcome:
    return LineOutcome(error=kind)


def _identifier_end(line: str, pos: int) -> int:
    n = len(line)
    while pos < n and not is_whitespace(line[pos]):
        pos += 1
    return pos


def _is_unterminated_quote(raw: str) -> bool:
    return raw.startswith(QUOTE) and (len(raw) == 1 or not raw.endswith(QUOTE))


def classify_line(line: str, spans: Sequence[LiteralSpan], *, line_no: int = 0) -> LineOutcome:
    """
    Classify one logical line and tokenize its arguments.

    Prefix glyphs (`#` comment, `@` attribute, `!` global) are read up to the
    identifier; a line takes at most one of them.
    """
    line = trim(line)
    n = len(line)
    if n == 0:
        return _fail(ErrorKind.EOL_NO_DATA)

    kind = ElementType.STANDARD
    pos = 0
    while pos < n:
        ch = line[pos]
        if is_whitespace(ch):
            pos += 1
            continue

        if ch == HASH and kind == ElementType.STANDARD:
            # Everything past the hash is the comment, verbatim.
            return LineOutcome(
                element=Element(type=ElementType.COMMENT, identifier=line[pos + 1 :], source_line=line_no)
            )
        if ch in (HASH, AT):
            if kind != ElementType.STANDARD:
                return _fail(ErrorKind.BADTOKEN_AT)
            kind = ElementType.ATTRIBUTE
            pos += 1
            continue
        if ch == BANG:
            if kind != ElementType.STANDARD:
                return _fail(ErrorKind.BADTOKEN_BANG)
            kind = ElementType.GLOBAL
            pos += 1
            continue
        break

    end = _identifier_end(line, pos)
    raw = line[pos:end]
    if _is_unterminated_quote(raw):
        return _fail(ErrorKind.UNTERMINATED_QUOTE)

    identifier = unquote(raw)
    if len(identifier) == 0:
        return _fail(_MISSING_IDENTIFIER[kind])

    element = Element(type=kind, identifier=identifier, source_line=line_no)
    try:
        keyvals = split_args(line[end:], spans)
    except UnterminatedSpanError:
        return _fail(ErrorKind.UNTERMINATED_QUOTE)
    for kv in keyvals:
        element.upsert(kv)
    return LineOutcome(element=element)

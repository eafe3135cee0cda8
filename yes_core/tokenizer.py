"""
Argument tokenizer for the text after an element identifier.

Two passes over the same text, both aware of literal spans:

  1. `infer_delimiter` learns whether the arguments are comma- or
     whitespace-separated. The first comma outside a span decides it.
     Without a comma, a lone `key = value` pair (padded with spaces) still
     counts as comma-separated so the padding does not split it.
  2. `tokenize` splits the text with the learned delimiter and records the
     `=` pivot of every token.

`tokens_to_keyvals` turns the raw tokens into `KeyVal`s.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from yes_core.glyphs import COMMA, EQUAL, QUOTE, SPACE, TAB, WHITESPACE, Delimiter
from yes_core.keyval import KeyVal
from yes_core.literal import LiteralSpan, span_opening_at


class UnterminatedSpanError(ValueError):
    def __init__(self, span: LiteralSpan, col: int) -> None:
        super().__init__(f"col {col + 1}: missing {span.end!r} to close {span.start!r}")
        self.span = span
        self.col = col


@dataclass(frozen=True)
class RawToken:
    data: str
    pivot: Optional[int] = None  # offset of the first `=` outside spans


def is_whitespace(ch: str) -> bool:
    return ch == SPACE or ch == TAB


def trim(text: str) -> str:
    return text.strip(WHITESPACE)


def unquote(text: str) -> str:
    if not isinstance(text, str) or len(text) <= 1:
        return text
    if text[0] == QUOTE and text[-1] == QUOTE:
        return text[1:-1]
    return trim(text)


def _skip_whitespace(text: str, pos: int) -> int:
    n = len(text)
    while pos < n and is_whitespace(text[pos]):
        pos += 1
    return pos


def _span_exit(text: str, pos: int, span: LiteralSpan) -> Optional[int]:
    # `pos` is the opening glyph; returns the index just past the closing glyph.
    end = text.find(span.end, pos + 1)
    if end == -1:
        return None
    return end + 1


def infer_delimiter(text: str, spans: Sequence[LiteralSpan]) -> Delimiter:
    seen_space = False
    seen_equal = False
    equal_count = 0
    tokens_before = 0
    tokens_after = 0
    # Whitespace trailing the latest token on each side of the first `=`.
    spaces_before = 0
    spaces_after = 0
    in_token = False

    # Leading whitespace is not a separator.
    i = _skip_whitespace(text, 0)
    n = len(text)
    while i < n:
        ch = text[i]
        if is_whitespace(ch):
            if in_token:
                if seen_equal:
                    spaces_after += 1
                else:
                    spaces_before += 1
            seen_space = True
            in_token = False
        elif ch == EQUAL:
            in_token = False
            seen_equal = True
            equal_count += 1
        else:
            if not in_token:
                if seen_equal:
                    tokens_after += 1
                else:
                    tokens_before += 1
            if seen_equal:
                spaces_after = 0
            else:
                spaces_before = 0
            in_token = True

        span = span_opening_at(ch, spans)
        if span is not None:
            exit_pos = _span_exit(text, i, span)
            if exit_pos is None:
                break
            i = exit_pos
            continue

        if ch == COMMA:
            return Delimiter.COMMA
        i += 1

    one_pair = (
        equal_count == 1
        and tokens_before == 1
        and tokens_after <= 1
        and abs(spaces_before - spaces_after) <= 1
    )
    if one_pair and seen_space:
        return Delimiter.COMMA
    return Delimiter.SPACE


def tokenize(text: str, delimiter: Delimiter, spans: Sequence[LiteralSpan]) -> List[RawToken]:
    if delimiter == Delimiter.COMMA:
        def is_delim(ch: str) -> bool:
            return ch == COMMA
    else:
        is_delim = is_whitespace

    tokens: List[RawToken] = []
    n = len(text)
    start = _skip_whitespace(text, 0)
    pivot: Optional[int] = None

    i = start
    while i < n:
        ch = text[i]
        if ch == EQUAL:
            if pivot is None:
                pivot = i - start
            i += 1
            continue

        if is_delim(ch):
            tokens.append(RawToken(text[start:i], pivot))
            start = i = _skip_whitespace(text, i + 1)
            pivot = None
            continue

        span = span_opening_at(ch, spans)
        if span is not None:
            exit_pos = _span_exit(text, i, span)
            if exit_pos is None:
                raise UnterminatedSpanError(span, i)
            i = exit_pos
            continue
        i += 1

    if start < n:
        tokens.append(RawToken(text[start:], pivot))
    return tokens


def tokens_to_keyvals(tokens: Sequence[RawToken]) -> List[KeyVal]:
    out: List[KeyVal] = []
    for token in tokens:
        data = token.data
        # A bare `=` carries neither key nor value.
        if trim(data) == EQUAL:
            continue

        if token.pivot is None:
            out.append(KeyVal(None, unquote(trim(data))))
            continue

        key = unquote(trim(data[: token.pivot]))
        val = unquote(trim(data[token.pivot + 1 :]))
        if not trim(key):
            out.append(KeyVal(None, val))
            continue
        out.append(KeyVal(key, val))
    return out


def split_args(text: str, spans: Sequence[LiteralSpan]) -> List[KeyVal]:
    delimiter = infer_delimiter(text, spans)
    return tokens_to_keyvals(tokenize(text, delimiter, spans))

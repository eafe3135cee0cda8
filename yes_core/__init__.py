from __future__ import annotations

from loguru import logger

from yes_core.classifier import LineOutcome, classify_line
from yes_core.config import ParserConfig
from yes_core.document import Collector, DocumentResult, ErrorRecord, parse, parse_file
from yes_core.element import Element, NotAnAttributeError
from yes_core.glyphs import Delimiter, ElementType, ErrorKind
from yes_core.keyval import KeyVal
from yes_core.literal import DEFAULT_QUOTE_SPAN, LiteralSpan, LiteralSpanError
from yes_core.tokenizer import RawToken, UnterminatedSpanError, infer_delimiter, tokenize

# Library code stays quiet unless the application opts in.
logger.disable("yes_core")

__all__ = [
    "Collector",
    "DEFAULT_QUOTE_SPAN",
    "Delimiter",
    "DocumentResult",
    "Element",
    "ElementType",
    "ErrorKind",
    "ErrorRecord",
    "KeyVal",
    "LineOutcome",
    "LiteralSpan",
    "LiteralSpanError",
    "NotAnAttributeError",
    "ParserConfig",
    "RawToken",
    "UnterminatedSpanError",
    "classify_line",
    "infer_delimiter",
    "parse",
    "parse_file",
    "tokenize",
]

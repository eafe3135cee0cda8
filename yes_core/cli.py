from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger
from pydantic import ValidationError

from yes_core.config import ParserConfig
from yes_core.document import DocumentResult, parse_file
from yes_core.literal import as_span


def _setup_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")
    logger.enable("yes_core")


def _load_config(args: argparse.Namespace) -> ParserConfig:
    cfg = ParserConfig.load(args.config) if args.config else ParserConfig.from_env()
    if args.literal:
        extra = [(s.start, s.end) for s in (as_span(raw) for raw in args.literal)]
        cfg = cfg.model_copy(update={"literal_spans": list(cfg.literal_spans) + extra})
    if args.show_blank_errors:
        cfg = cfg.model_copy(update={"hide_blank_lines": False})
    return cfg


def _render(result: DocumentResult, *, fmt: str, hide_blank_lines: bool) -> str:
    if fmt == "json":
        data = result.to_dict()
        if hide_blank_lines:
            data["errors"] = [e.to_dict() for e in result.visible_errors()]
        return json.dumps(data, ensure_ascii=False, indent=2)
    return result.render(include_errors=True, hide_blank_lines=hide_blank_lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Parse a YES element document and print its elements.")
    p.add_argument("input", help="Input document")
    p.add_argument("-o", "--output", default="", help="Output file (optional, default: stdout)")
    p.add_argument("--format", default="text", choices=["text", "json"], help="Output format")
    p.add_argument(
        "--literal",
        action="append",
        default=[],
        help="Extra literal span as two glyphs, e.g. '[]' (repeatable)",
    )
    p.add_argument("--config", default="", help="JSON config file (default: YES_* environment variables)")
    p.add_argument("--show-blank-errors", action="store_true", help="Also report blank lines (EOL_NO_DATA)")
    p.add_argument("--strict", action="store_true", help="Exit with status 1 if any error is reported")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    args = p.parse_args(list(argv) if argv is not None else None)

    _setup_logging(bool(args.verbose))

    try:
        cfg = _load_config(args)
    except (ValidationError, ValueError, OSError) as exc:
        print(f"invalid configuration: {exc}", file=sys.stderr)
        return 2

    try:
        result = parse_file(args.input, cfg.spans(), encoding=cfg.encoding)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"cannot read {args.input}: {exc}", file=sys.stderr)
        return 2

    out = _render(result, fmt=str(args.format), hide_blank_lines=cfg.hide_blank_lines)
    if args.output:
        Path(args.output).write_text(out + "\n", encoding="utf-8")
    else:
        print(out)

    if args.strict and result.visible_errors(hide_blank_lines=cfg.hide_blank_lines):
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

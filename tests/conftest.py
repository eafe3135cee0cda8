from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import pytest

from yes_core import DocumentResult, Element, parse


FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


def extract(element: Element) -> List[Dict[str, Any]]:
    out = []
    for kv in element.args:
        d: Dict[str, Any] = {}
        if kv.key is not None:
            d["key"] = kv.key
        d["val"] = kv.val
        out.append(d)
    return out


def parse_lines(lines: List[str], literals=None) -> DocumentResult:
    return parse("\r\n".join(lines), literals)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR

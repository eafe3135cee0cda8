from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from yes_core.document import parse


def _canonical(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _canonical(obj[k]) for k in sorted(obj.keys())}
    if isinstance(obj, list):
        return [_canonical(x) for x in obj]
    return obj


def _load_fixtures_cfg(fixtures_dir: Path) -> Dict[str, Dict[str, Any]]:
    cfg_path = fixtures_dir / "fixtures.json"
    raw = json.loads(cfg_path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise SystemExit("fixtures.json must be an object")
    out: Dict[str, Dict[str, Any]] = {}
    for k, v in raw.items():
        if not isinstance(k, str) or not isinstance(v, dict):
            continue
        out[k] = v
    return out


def run_fixture(text: str, *, literals: Sequence[str] = ()) -> Any:
    return _canonical(parse(text, list(literals)).to_dict())


def check(fixtures_dir: Path, *, update: bool = False, only: str = "") -> List[str]:
    """Returns the names of fixtures whose output differs from the golden file."""
    cfg = _load_fixtures_cfg(fixtures_dir)
    failures: List[str] = []
    for name, opt in cfg.items():
        if only and name != only:
            continue
        in_path = fixtures_dir / name
        out_path = fixtures_dir / (name + ".golden.json")
        text = in_path.read_text(encoding="utf-8")
        data = run_fixture(text, literals=[str(x) for x in (opt.get("literals") or [])])

        if update or not out_path.exists():
            out_path.write_text(json.dumps(data, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
            print(f"[update] {out_path.name}")
            continue

        expected = _canonical(json.loads(out_path.read_text(encoding="utf-8")))
        if expected != data:
            failures.append(name)
            print(f"[FAIL] {name} differs from golden: {out_path.name}")
        else:
            print(f"[ok] {name}")
    return failures


def main(argv: Optional[Sequence[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Golden fixture runner for the element document parser.")
    p.add_argument(
        "--fixtures",
        default=str(Path("tests") / "fixtures"),
        help="Fixtures directory holding fixtures.json (default: ./tests/fixtures).",
    )
    p.add_argument("--update", action="store_true", help="Regenerate golden JSON files.")
    p.add_argument("--only", default="", help="Only run a single fixture file.")
    args = p.parse_args(list(argv) if argv is not None else None)

    fixtures_dir = Path(args.fixtures)
    if not (fixtures_dir / "fixtures.json").is_file():
        raise SystemExit(f"fixtures dir not found: {fixtures_dir} (expected fixtures.json)")
    try:
        failures = check(fixtures_dir, update=bool(args.update), only=str(args.only))
    except OSError as exc:
        raise SystemExit(f"cannot read fixtures: {exc}")
    if failures:
        raise SystemExit(f"{len(failures)} fixture(s) failed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

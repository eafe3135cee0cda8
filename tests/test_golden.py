from __future__ import annotations

import json
import shutil

import pytest

from yes_core import golden_check


def test_fixtures_match_goldens(fixtures_dir):
    assert golden_check.check(fixtures_dir) == []


def test_update_writes_missing_goldens(tmp_path, fixtures_dir):
    shutil.copy(fixtures_dir / "spans.yes", tmp_path / "spans.yes")
    (tmp_path / "fixtures.json").write_text(json.dumps({"spans.yes": {"literals": ["[]", "()"]}}), encoding="utf-8")

    assert golden_check.check(tmp_path) == []
    written = json.loads((tmp_path / "spans.yes.golden.json").read_text(encoding="utf-8"))
    expected = json.loads((fixtures_dir / "spans.yes.golden.json").read_text(encoding="utf-8"))
    assert written == expected


def test_mismatch_fails_main(tmp_path):
    (tmp_path / "a.yes").write_text("a 1\n", encoding="utf-8")
    (tmp_path / "a.yes.golden.json").write_text(json.dumps({"elements": [], "errors": []}), encoding="utf-8")
    (tmp_path / "fixtures.json").write_text(json.dumps({"a.yes": {}}), encoding="utf-8")

    with pytest.raises(SystemExit):
        golden_check.main(["--fixtures", str(tmp_path)])
    assert golden_check.main(["--fixtures", str(tmp_path), "--update"]) == 0
    assert golden_check.main(["--fixtures", str(tmp_path)]) == 0


def test_missing_fixtures_dir_exits_cleanly(tmp_path):
    with pytest.raises(SystemExit) as exc:
        golden_check.main(["--fixtures", str(tmp_path)])

    assert exc.value.code != 0
    assert "fixtures dir not found" in str(exc.value.code)


def test_default_fixtures_dir_is_relative_to_cwd(tmp_path, monkeypatch, fixtures_dir):
    target = tmp_path / "tests" / "fixtures"
    shutil.copytree(fixtures_dir, target)
    monkeypatch.chdir(tmp_path)

    assert golden_check.main([]) == 0

from __future__ import annotations

import os
import stat
import sys
from pathlib import Path

import pytest

from brewer.platform.files import atomic_write_text


def test_atomic_write_text_creates_parent_dirs(tmp_path: Path) -> None:
    path = tmp_path / "dist" / "tool-x.rb"
    atomic_write_text(path, "class ToolX < Formula\nend\n")

    assert path.read_text(encoding="utf-8") == "class ToolX < Formula\nend\n"


def test_atomic_write_text_replaces_existing_content(tmp_path: Path) -> None:
    path = tmp_path / "tool-x.rb"
    path.write_text("old", encoding="utf-8")

    atomic_write_text(path, "new")

    assert path.read_text(encoding="utf-8") == "new"


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
def test_atomic_write_text_uses_world_readable_mode(tmp_path: Path) -> None:
    path = tmp_path / "tool-x.rb"
    atomic_write_text(path, "x")

    assert stat.S_IMODE(path.stat().st_mode) == 0o644


def test_atomic_write_text_cleans_temp_file_on_replace_failure(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    path = tmp_path / "tool-x.rb"

    def fail_replace(_src: Path, _dst: Path) -> None:
        raise OSError("replace failed")

    monkeypatch.setattr(os, "replace", fail_replace)

    with pytest.raises(OSError, match="replace failed"):
        atomic_write_text(path, "payload")

    assert list(tmp_path.glob(".tool-x.rb.*.tmp")) == []
    assert not path.exists()

from __future__ import annotations

from pathlib import Path

import pytest
import typer

from brewer.cli.context import build_context
from brewer.core.config import Config
from brewer.core.errors import ErrorCode


def test_defaults_without_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    ctx = build_context()

    assert ctx.root.resolve() == tmp_path.resolve()
    assert ctx.config == Config()


def test_reads_implicit_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".brewer.toml").write_text('[tap]\nfolder = "Formula"\n', encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert build_context().config.tap.folder == "Formula"


def test_explicit_config_must_exist(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    with pytest.raises(typer.Exit) as exc:
        build_context(tmp_path / "missing.toml")

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)

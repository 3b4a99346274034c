from __future__ import annotations

from brewer.core.result import Err, Ok
from brewer.github.credentials import Credentials, credentials_from_env


def test_reads_tools_token() -> None:
    assert credentials_from_env({"GH_TOOLS_TOKEN": "abc"}) == Ok(Credentials(token="abc"))


def test_falls_back_to_github_token() -> None:
    assert credentials_from_env({"GITHUB_TOKEN": " xyz "}) == Ok(Credentials(token="xyz"))


def test_tools_token_wins() -> None:
    result = credentials_from_env({"GH_TOOLS_TOKEN": "a", "GITHUB_TOKEN": "b"})
    assert result == Ok(Credentials(token="a"))


def test_missing_token() -> None:
    result = credentials_from_env({"GH_TOOLS_TOKEN": "  "})
    assert isinstance(result, Err)
    assert "GH_TOOLS_TOKEN" in result.error.message


def test_repr_hides_token() -> None:
    assert "secret" not in repr(Credentials(token="secret"))

"""Tests for github/contents.py."""

from __future__ import annotations

import base64
import io
import json
import urllib.error
import urllib.request
from email.message import Message
from typing import Any

import pytest

from brewer.core.result import Err, Ok
from brewer.github.contents import (
    ContentsError,
    ContentStore,
    GitHubContentStore,
    MockContentStore,
    RemoteFile,
    git_blob_sha,
)
from brewer.github.credentials import Credentials


# =============================================================================
# ContentsError
# =============================================================================


class TestContentsError:
    def test_not_found_only_for_404(self) -> None:
        assert ContentsError(url="u", status=404, message="Not Found").is_not_found
        assert not ContentsError(url="u", status=0, message="timed out").is_not_found
        assert not ContentsError(url="u", status=500, message="oops").is_not_found

    def test_conflict(self) -> None:
        assert ContentsError(url="u", status=409, message="x does not match y").is_conflict
        assert ContentsError(url="u", status=422, message='"sha" wasn\'t supplied.').is_conflict
        assert not ContentsError(url="u", status=422, message="Invalid path").is_conflict
        assert not ContentsError(url="u", status=401, message="Bad credentials").is_conflict

    def test_str(self) -> None:
        assert str(ContentsError(url="u", status=403, message="Forbidden")) == (
            "HTTP 403: Forbidden (u)"
        )
        assert str(ContentsError(url="u", status=0, message="refused")) == "refused (u)"


def test_git_blob_sha_matches_git() -> None:
    # `printf 'hello' | git hash-object --stdin`
    assert git_blob_sha(b"hello") == "b6fc4c620b67d95f953a5c1c1230aaab5db5a1b0"


# =============================================================================
# GitHubContentStore
# =============================================================================


class _Response:
    def __init__(self, payload: object) -> None:
        self._raw = json.dumps(payload).encode("utf-8")

    def read(self) -> bytes:
        return self._raw

    def __enter__(self) -> _Response:
        return self

    def __exit__(self, *exc: object) -> None:
        return None


def _http_error(url: str, code: int, payload: object) -> urllib.error.HTTPError:
    return urllib.error.HTTPError(
        url, code, "reason", Message(), io.BytesIO(json.dumps(payload).encode("utf-8"))
    )


class _Recorder:
    def __init__(self, *outcomes: object) -> None:
        self.outcomes = list(outcomes)
        self.requests: list[urllib.request.Request] = []
        self.timeouts: list[float | None] = []

    def __call__(self, req: urllib.request.Request, **kwargs: Any) -> _Response:
        self.requests.append(req)
        self.timeouts.append(kwargs.get("timeout"))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return _Response(outcome)

    def body(self, index: int) -> dict[str, Any]:
        data = self.requests[index].data
        assert isinstance(data, bytes)
        return json.loads(data.decode("utf-8"))


@pytest.fixture
def store() -> GitHubContentStore:
    return GitHubContentStore(Credentials(token="t0k"), api_url="https://api.example.com/")


class TestGitHubContentStore:
    def test_implements_protocol(self, store: GitHubContentStore) -> None:
        assert isinstance(store, ContentStore)

    def test_contents_url_quotes_path(self, store: GitHubContentStore) -> None:
        assert store.contents_url("acme", "homebrew-tap", "/Formula/my tool.rb") == (
            "https://api.example.com/repos/acme/homebrew-tap/contents/Formula/my%20tool.rb"
        )

    def test_get_file(self, store: GitHubContentStore, monkeypatch: pytest.MonkeyPatch) -> None:
        rec = _Recorder({"type": "file", "path": "tool-x.rb", "sha": "abc123"})
        monkeypatch.setattr(urllib.request, "urlopen", rec)

        result = store.get_file("acme", "homebrew-tap", "tool-x.rb")

        assert result == Ok(RemoteFile(path="tool-x.rb", sha="abc123"))
        req = rec.requests[0]
        assert req.get_method() == "GET"
        assert req.get_header("Authorization") == "Bearer t0k"

    def test_get_file_404(self, store: GitHubContentStore, monkeypatch: pytest.MonkeyPatch) -> None:
        url = store.contents_url("acme", "homebrew-tap", "tool-x.rb")
        rec = _Recorder(_http_error(url, 404, {"message": "Not Found"}))
        monkeypatch.setattr(urllib.request, "urlopen", rec)

        result = store.get_file("acme", "homebrew-tap", "tool-x.rb")

        assert isinstance(result, Err)
        assert result.error.is_not_found
        assert result.error.message == "Not Found"

    def test_get_file_network_error_is_not_404(
        self, store: GitHubContentStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        rec = _Recorder(urllib.error.URLError("connection refused"))
        monkeypatch.setattr(urllib.request, "urlopen", rec)

        result = store.get_file("acme", "homebrew-tap", "tool-x.rb")

        assert isinstance(result, Err)
        assert result.error.status == 0
        assert not result.error.is_not_found

    def test_requests_are_bounded_by_socket_timeout(
        self, store: GitHubContentStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        rec = _Recorder({"type": "file", "path": "tool-x.rb", "sha": "abc123"})
        monkeypatch.setattr(urllib.request, "urlopen", rec)

        store.get_file("acme", "homebrew-tap", "tool-x.rb")

        assert rec.timeouts == [60.0]

    def test_timeout_is_not_404(
        self, store: GitHubContentStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(urllib.request, "urlopen", _Recorder(TimeoutError()))

        result = store.get_file("acme", "homebrew-tap", "tool-x.rb")

        assert result == Err(
            ContentsError(
                url=store.contents_url("acme", "homebrew-tap", "tool-x.rb"),
                status=0,
                message="Request timed out",
            )
        )

    def test_get_file_directory(
        self, store: GitHubContentStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(urllib.request, "urlopen", _Recorder([{"name": "a.rb"}]))

        result = store.get_file("acme", "homebrew-tap", "Formula")

        assert isinstance(result, Err)
        assert "not a file" in result.error.message

    def test_create_file_sends_no_sha(
        self, store: GitHubContentStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        rec = _Recorder({"content": {}, "commit": {}})
        monkeypatch.setattr(urllib.request, "urlopen", rec)

        result = store.create_file(
            "acme",
            "homebrew-tap",
            "tool-x.rb",
            content=b"class ToolX < Formula\nend\n",
            message="Brew formula update",
            committer_name="1gtm",
            committer_email="1gtm@appscode.com",
        )

        assert result == Ok(None)
        assert rec.requests[0].get_method() == "PUT"
        body = rec.body(0)
        assert "sha" not in body
        assert base64.b64decode(body["content"]) == b"class ToolX < Formula\nend\n"
        assert body["committer"] == {"name": "1gtm", "email": "1gtm@appscode.com"}
        assert body["message"] == "Brew formula update"

    def test_update_file_sends_sha(
        self, store: GitHubContentStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        rec = _Recorder({"content": {}, "commit": {}})
        monkeypatch.setattr(urllib.request, "urlopen", rec)

        result = store.update_file(
            "acme",
            "homebrew-tap",
            "tool-x.rb",
            content=b"x",
            message="m",
            committer_name="n",
            committer_email="e",
            sha="abc123",
        )

        assert result == Ok(None)
        assert rec.body(0)["sha"] == "abc123"

    def test_update_file_conflict(
        self, store: GitHubContentStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        url = store.contents_url("acme", "homebrew-tap", "tool-x.rb")
        rec = _Recorder(_http_error(url, 409, {"message": "tool-x.rb does not match abc"}))
        monkeypatch.setattr(urllib.request, "urlopen", rec)

        result = store.update_file(
            "acme",
            "homebrew-tap",
            "tool-x.rb",
            content=b"x",
            message="m",
            committer_name="n",
            committer_email="e",
            sha="abc",
        )

        assert isinstance(result, Err)
        assert result.error.is_conflict


# =============================================================================
# MockContentStore
# =============================================================================


class TestMockContentStore:
    def test_implements_protocol(self) -> None:
        assert isinstance(MockContentStore(), ContentStore)

    def test_missing_file_is_404(self) -> None:
        result = MockContentStore().get_file("o", "r", "p.rb")
        assert isinstance(result, Err)
        assert result.error.is_not_found

    def test_get_returns_blob_sha(self) -> None:
        store = MockContentStore()
        sha = store.set_file("o", "r", "p.rb", b"hello")

        assert store.get_file("o", "r", "p.rb") == Ok(RemoteFile(path="p.rb", sha=sha))

    def test_update_with_stale_sha_is_rejected(self) -> None:
        store = MockContentStore()
        store.set_file("o", "r", "p.rb", b"v1")

        result = store.update_file(
            "o",
            "r",
            "p.rb",
            content=b"v2",
            message="m",
            committer_name="n",
            committer_email="e",
            sha="0" * 40,
        )

        assert isinstance(result, Err)
        assert result.error.is_conflict
        assert store.content_of("o", "r", "p.rb") == b"v1"

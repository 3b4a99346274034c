"""GitHub repository contents API.

This module provides:
- ContentStore: Protocol for reading and writing one file in a repository
- GitHubContentStore: Real implementation on top of urllib
- MockContentStore: In-memory implementation for tests

Every write is a commit. Updates carry the blob SHA returned by the last
read of the same path; GitHub rejects the write if the file moved on since.
"""

from __future__ import annotations

import base64
import hashlib
import json
import ssl
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from brewer.core.result import Err, Ok, Result
from brewer.core.structured import as_str_dict, get_str
from brewer.github.credentials import Credentials

__all__ = [
    "API_URL",
    "ContentsError",
    "ContentStore",
    "GitHubContentStore",
    "MockContentStore",
    "RemoteFile",
    "StoreCall",
    "git_blob_sha",
]

API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"


@dataclass(frozen=True, slots=True)
class ContentsError:
    """Error returned by the contents API.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    @property
    def is_not_found(self) -> bool:
        """True only for a definitive 404 from the server."""
        return self.status == 404

    @property
    def is_conflict(self) -> bool:
        """True when a write was rejected because the file changed remotely."""
        if self.status == 409:
            return True
        return self.status == 422 and "sha" in self.message.lower()

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@dataclass(frozen=True, slots=True)
class RemoteFile:
    """A file as last read from the store.

    ``sha`` is the revision token required to update it.
    """

    path: str
    sha: str


@runtime_checkable
class ContentStore(Protocol):
    """Versioned file storage addressed by (owner, repo, path)."""

    def get_file(self, owner: str, repo: str, path: str) -> Result[RemoteFile, ContentsError]:
        """Read file metadata. A missing file is an Err with status 404."""
        ...

    def create_file(
        self,
        owner: str,
        repo: str,
        path: str,
        *,
        content: bytes,
        message: str,
        committer_name: str,
        committer_email: str,
    ) -> Result[None, ContentsError]: ...

    def update_file(
        self,
        owner: str,
        repo: str,
        path: str,
        *,
        content: bytes,
        message: str,
        committer_name: str,
        committer_email: str,
        sha: str,
    ) -> Result[None, ContentsError]: ...


class GitHubContentStore:
    """ContentStore backed by the GitHub REST API.

    Requests are synchronous and have no retry. The timeout only bounds a
    single socket operation.
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        api_url: str = API_URL,
        timeout: float = 60.0,
        user_agent: str = "brewer",
    ) -> None:
        self._credentials = credentials
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def contents_url(self, owner: str, repo: str, path: str) -> str:
        quoted = urllib.parse.quote(path.strip("/"), safe="/")
        return f"{self.api_url}/repos/{owner}/{repo}/contents/{quoted}"

    def _request(
        self, method: str, url: str, body: dict[str, object] | None = None
    ) -> Result[object, ContentsError]:
        headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self._credentials.token}",
            "User-Agent": self.user_agent,
            "X-GitHub-Api-Version": API_VERSION,
        }
        data: bytes | None = None
        if body is not None:
            data = json.dumps(body).encode("utf-8")
            headers["Content-Type"] = "application/json"

        req = urllib.request.Request(url, data=data, headers=headers, method=method)
        try:
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                raw = response.read()
        except urllib.error.HTTPError as e:
            return Err(ContentsError(url=url, status=e.code, message=_error_message(e)))
        except urllib.error.URLError as e:
            return Err(ContentsError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(ContentsError(url=url, status=0, message="Request timed out"))
        except OSError as e:
            return Err(ContentsError(url=url, status=0, message=str(e)))

        try:
            return Ok(json.loads(raw.decode("utf-8")) if raw else None)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(ContentsError(url=url, status=0, message=f"JSON parse error: {e}"))

    def get_file(self, owner: str, repo: str, path: str) -> Result[RemoteFile, ContentsError]:
        url = self.contents_url(owner, repo, path)
        result = self._request("GET", url)
        if isinstance(result, Err):
            return result

        # Directories come back as a JSON list.
        data = as_str_dict(result.value)
        if data is None or get_str(data, "type") not in (None, "file"):
            return Err(ContentsError(url=url, status=0, message=f"not a file: {path}"))

        sha = get_str(data, "sha")
        if sha is None:
            return Err(ContentsError(url=url, status=0, message="missing sha in contents payload"))
        return Ok(RemoteFile(path=get_str(data, "path") or path, sha=sha))

    def _put(
        self,
        owner: str,
        repo: str,
        path: str,
        *,
        content: bytes,
        message: str,
        committer_name: str,
        committer_email: str,
        sha: str | None,
    ) -> Result[None, ContentsError]:
        body: dict[str, object] = {
            "message": message,
            "content": base64.b64encode(content).decode("ascii"),
            "committer": {"name": committer_name, "email": committer_email},
        }
        if sha is not None:
            body["sha"] = sha

        result = self._request("PUT", self.contents_url(owner, repo, path), body)
        if isinstance(result, Err):
            return result
        return Ok(None)

    def create_file(
        self,
        owner: str,
        repo: str,
        path: str,
        *,
        content: bytes,
        message: str,
        committer_name: str,
        committer_email: str,
    ) -> Result[None, ContentsError]:
        return self._put(
            owner,
            repo,
            path,
            content=content,
            message=message,
            committer_name=committer_name,
            committer_email=committer_email,
            sha=None,
        )

    def update_file(
        self,
        owner: str,
        repo: str,
        path: str,
        *,
        content: bytes,
        message: str,
        committer_name: str,
        committer_email: str,
        sha: str,
    ) -> Result[None, ContentsError]:
        return self._put(
            owner,
            repo,
            path,
            content=content,
            message=message,
            committer_name=committer_name,
            committer_email=committer_email,
            sha=sha,
        )


def _error_message(e: urllib.error.HTTPError) -> str:
    """Prefer GitHub's JSON ``message`` over the bare HTTP reason."""
    try:
        payload: object = json.loads(e.read().decode("utf-8"))
    except (OSError, ValueError):
        return str(e.reason)
    data = as_str_dict(payload)
    if data is not None:
        msg = get_str(data, "message")
        if msg:
            return msg
    return str(e.reason)


def git_blob_sha(content: bytes) -> str:
    """SHA-1 of a git blob object, the revision token GitHub reports."""
    h = hashlib.sha1()
    h.update(f"blob {len(content)}\0".encode("ascii"))
    h.update(content)
    return h.hexdigest()


@dataclass(frozen=True, slots=True)
class StoreCall:
    """One recorded MockContentStore call."""

    op: str
    owner: str
    repo: str
    path: str
    content: bytes | None = None
    message: str | None = None
    committer: tuple[str, str] | None = None
    sha: str | None = None


def _empty_files() -> dict[tuple[str, str, str], bytes]:
    return {}


def _empty_calls() -> list[StoreCall]:
    return []


@dataclass
class MockContentStore:
    """In-memory ContentStore for testing.

    Usage:
        store = MockContentStore()
        store.set_file("acme", "homebrew-tap", "tool.rb", b"old")
        store.get_file("acme", "homebrew-tap", "tool.rb")  # Ok(RemoteFile(...))

    ``get_error`` / ``create_error`` / ``update_error`` force the matching
    operation to fail. ``move_on_read`` simulates another publisher writing
    between our read and our update.
    """

    files: dict[tuple[str, str, str], bytes] = field(default_factory=_empty_files)
    calls: list[StoreCall] = field(default_factory=_empty_calls)
    get_error: ContentsError | None = None
    create_error: ContentsError | None = None
    update_error: ContentsError | None = None
    move_on_read: bool = False

    def set_file(self, owner: str, repo: str, path: str, content: bytes) -> str:
        """Seed a file and return its revision token."""
        self.files[(owner, repo, path)] = content
        return git_blob_sha(content)

    def content_of(self, owner: str, repo: str, path: str) -> bytes | None:
        return self.files.get((owner, repo, path))

    def ops(self) -> list[str]:
        return [c.op for c in self.calls]

    def _url(self, owner: str, repo: str, path: str) -> str:
        return f"mock://{owner}/{repo}/{path}"

    def get_file(self, owner: str, repo: str, path: str) -> Result[RemoteFile, ContentsError]:
        self.calls.append(StoreCall(op="get", owner=owner, repo=repo, path=path))
        if self.get_error is not None:
            return Err(self.get_error)

        content = self.files.get((owner, repo, path))
        if content is None:
            return Err(
                ContentsError(
                    url=self._url(owner, repo, path), status=404, message="Not Found (mock)"
                )
            )

        sha = git_blob_sha(content)
        if self.move_on_read:
            self.files[(owner, repo, path)] = content + b"\n# concurrent edit\n"
        return Ok(RemoteFile(path=path, sha=sha))

    def create_file(
        self,
        owner: str,
        repo: str,
        path: str,
        *,
        content: bytes,
        message: str,
        committer_name: str,
        committer_email: str,
    ) -> Result[None, ContentsError]:
        self.calls.append(
            StoreCall(
                op="create",
                owner=owner,
                repo=repo,
                path=path,
                content=content,
                message=message,
                committer=(committer_name, committer_email),
            )
        )
        if self.create_error is not None:
            return Err(self.create_error)
        if (owner, repo, path) in self.files:
            return Err(
                ContentsError(
                    url=self._url(owner, repo, path),
                    status=422,
                    message='Invalid request. "sha" wasn\'t supplied.',
                )
            )
        self.files[(owner, repo, path)] = content
        return Ok(None)

    def update_file(
        self,
        owner: str,
        repo: str,
        path: str,
        *,
        content: bytes,
        message: str,
        committer_name: str,
        committer_email: str,
        sha: str,
    ) -> Result[None, ContentsError]:
        self.calls.append(
            StoreCall(
                op="update",
                owner=owner,
                repo=repo,
                path=path,
                content=content,
                message=message,
                committer=(committer_name, committer_email),
                sha=sha,
            )
        )
        if self.update_error is not None:
            return Err(self.update_error)

        current = self.files.get((owner, repo, path))
        if current is None or git_blob_sha(current) != sha:
            return Err(
                ContentsError(
                    url=self._url(owner, repo, path),
                    status=409,
                    message=f"{path} does not match {sha}",
                )
            )
        self.files[(owner, repo, path)] = content
        return Ok(None)

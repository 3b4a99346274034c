from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

_SHA256_RE = re.compile(r"^[0-9a-f]{64}$")

GITHUB_BASE_URL = "https://github.com"


@dataclass(frozen=True, slots=True)
class Committer:
    name: str
    email: str


@dataclass(frozen=True, slots=True)
class TapRepo:
    """Repository the formula is committed to."""

    owner: str
    repo: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True, slots=True)
class ReleaseMetadata:
    """Everything the caller knows about a release, as supplied by the CLI.

    Multi-line fields (install, caveats, test) are raw text blobs; they are
    split into lines when the formula data is assembled.
    """

    owner: str
    repo: str
    tap: TapRepo
    committer: Committer
    name: str = ""
    homepage: str = ""
    description: str = ""
    install: str = ""
    caveats: str = ""
    test: str = ""
    plist: str = ""
    folder: str = ""
    dependencies: tuple[str, ...] = ()
    conflicts: tuple[str, ...] = ()
    skip_upload: bool = False

    @property
    def formula_name(self) -> str:
        """File-level package name; defaults to the source repo name."""
        return self.name or self.repo

    @property
    def formula_filename(self) -> str:
        return f"{self.formula_name}.rb"

    @property
    def tap_path(self) -> str:
        """Path of the formula inside the tap repository."""
        folder = self.folder.strip("/")
        if folder:
            return f"{folder}/{self.formula_filename}"
        return self.formula_filename


@dataclass(frozen=True, slots=True)
class Artifact:
    """The single built binary being released."""

    name: str
    path: Path
    version: str


@dataclass(frozen=True, slots=True)
class FormulaData:
    """Fully resolved input of the formula renderer."""

    class_name: str
    description: str
    homepage: str
    owner: str
    repo: str
    tag: str
    version: str
    file: str
    sha256: str
    install: tuple[str, ...]
    caveats: tuple[str, ...] = ()
    dependencies: tuple[str, ...] = ()
    conflicts: tuple[str, ...] = ()
    test: tuple[str, ...] = ()
    plist: str = ""
    download_base_url: str = field(default=GITHUB_BASE_URL)

    def __post_init__(self) -> None:
        if not _SHA256_RE.match(self.sha256):
            raise ValueError(f"sha256 must be 64 lowercase hex chars, got {self.sha256!r}")
        if not self.install:
            raise ValueError("formula needs at least one install line")

    @property
    def download_url(self) -> str:
        base = self.download_base_url.rstrip("/")
        return f"{base}/{self.owner}/{self.repo}/releases/download/{self.tag}/{self.file}"

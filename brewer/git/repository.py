"""Git repository abstraction.

Only the read-only queries needed to version a release live here.
All operations return Result types.

Usage:
    repo = Repository(Path("."))
    match repo.tag_at_head():
        case Ok(tag):
            print(f"Releasing {tag}")
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from brewer.core.result import Err, Ok, Result

_GIT = "git"
_GIT_TIMEOUT_SECONDS = 30.0

__all__ = ["GitError", "Repository", "run_git"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code (-1 if git never ran)
    """

    command: str
    message: str
    returncode: int = 1


def run_git(
    args: list[str], *, cwd: Path, timeout: float | None = None
) -> Result[str, GitError]:
    """Run ``git <args>`` in ``cwd`` and return its stdout."""
    command = " ".join(args)
    try:
        proc = subprocess.run(
            [_GIT, "-C", str(cwd), *args],
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError:
        return Err(GitError(command=command, message="git executable not found", returncode=-1))
    except subprocess.TimeoutExpired:
        return Err(
            GitError(command=command, message=f"git timed out after {timeout}s", returncode=-1)
        )
    except OSError as e:
        return Err(GitError(command=command, message=str(e), returncode=-1))

    if proc.returncode != 0:
        return Err(
            GitError(
                command=command,
                message=proc.stderr.strip() or f"git {command} failed",
                returncode=proc.returncode,
            )
        )
    return Ok(proc.stdout)


class Repository:
    """Git repository abstraction.

    Attributes:
        path: Path to the repository root (or any directory inside it)
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def tags_at_head(self) -> Result[list[str], GitError]:
        """List the tags that point at HEAD, in git's order."""
        result = run_git(
            ["tag", "-l", "--points-at", "HEAD"], cwd=self.path, timeout=_GIT_TIMEOUT_SECONDS
        )
        match result:
            case Err(e):
                return Err(e)
            case Ok(stdout):
                return Ok([ln.strip() for ln in stdout.splitlines() if ln.strip()])

    def tag_at_head(self) -> Result[str, GitError]:
        """Return the release tag at HEAD.

        When several tags point at HEAD the first one is used.

        Returns:
            Ok(tag) on success
            Err(GitError) when git fails or HEAD is not tagged
        """
        tags = self.tags_at_head()
        if isinstance(tags, Err):
            return tags
        if not tags.value:
            return Err(
                GitError(
                    command="tag -l --points-at HEAD",
                    message="no tag points at HEAD",
                    returncode=0,
                )
            )
        return Ok(tags.value[0])

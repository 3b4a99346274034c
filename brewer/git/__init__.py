"""Git operations module.

Usage:
    from brewer.git import Repository

    tag = Repository(Path(".")).tag_at_head()
"""

from brewer.git.repository import GitError, Repository, run_git

__all__ = [
    "GitError",
    "Repository",
    "run_git",
]

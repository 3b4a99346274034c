"""Result type for explicit error handling.

Every fallible step of the formula pipeline (hashing the artifact, rendering,
writing, talking to GitHub) returns a Result instead of raising, so the CLI
decides in one place how a failure is reported and which exit code is used.

Usage:
    match sha256_file(path):
        case Ok(digest):
            print(digest)
        case Err(error):
            print(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful result carrying ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed result carrying ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]

"""GitHub credentials.

The token is read once, at CLI startup, and handed to the content store.
Nothing below the CLI layer looks at the process environment.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from brewer.core.result import Err, Ok, Result

__all__ = ["TOKEN_ENV_VARS", "Credentials", "CredentialsError", "credentials_from_env"]

# First match wins.
TOKEN_ENV_VARS = ("GH_TOOLS_TOKEN", "GITHUB_TOKEN")


@dataclass(frozen=True, slots=True)
class Credentials:
    token: str

    def __repr__(self) -> str:
        return "Credentials(token=***)"


@dataclass(frozen=True, slots=True)
class CredentialsError:
    message: str
    hint: str | None = None


def credentials_from_env(env: Mapping[str, str]) -> Result[Credentials, CredentialsError]:
    for var in TOKEN_ENV_VARS:
        token = env.get(var, "").strip()
        if token:
            return Ok(Credentials(token=token))
    return Err(
        CredentialsError(
            message=f"{TOKEN_ENV_VARS[0]} env var is not set",
            hint=f"export {TOKEN_ENV_VARS[0]}=<token with contents:write on the tap>",
        )
    )

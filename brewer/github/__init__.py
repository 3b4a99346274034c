"""GitHub access: credentials and the repository contents API."""

from brewer.github.contents import (
    ContentsError,
    ContentStore,
    GitHubContentStore,
    MockContentStore,
    RemoteFile,
)
from brewer.github.credentials import Credentials, CredentialsError, credentials_from_env

__all__ = [
    # contents
    "ContentsError",
    "ContentStore",
    "GitHubContentStore",
    "MockContentStore",
    "RemoteFile",
    # credentials
    "Credentials",
    "CredentialsError",
    "credentials_from_env",
]

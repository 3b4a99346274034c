"""Create-or-update of a formula in the tap repository.

The protocol is optimistic: read the file's current revision token, then
write with that token as precondition. Nothing prevents another publisher
from writing between the two requests; GitHub then rejects our update and
we report a conflict instead of retrying. Releases that can race on the same
formula must be serialised by the caller (one release job per tap at a time).
"""

from __future__ import annotations

from dataclasses import dataclass

from brewer.core.result import Err, Ok, Result
from brewer.github.contents import ContentsError, ContentStore
from brewer.services.formula.errors import FormulaError
from brewer.services.formula.model import Committer, TapRepo

__all__ = ["PublishAction", "FormulaPublisher"]


@dataclass(frozen=True, slots=True)
class PublishAction:
    """What the publisher did."""

    created: bool
    path: str

    @property
    def verb(self) -> str:
        return "created" if self.created else "updated"


def _remote_error(action: str, tap: TapRepo, path: str, error: ContentsError) -> FormulaError:
    return FormulaError(
        kind="remote_api_error",
        message=f"{action} {tap.slug}/{path} failed: {error}",
    )


class FormulaPublisher:
    """Publishes formula text through a ContentStore."""

    def __init__(self, store: ContentStore) -> None:
        self._store = store

    def publish(
        self,
        tap: TapRepo,
        path: str,
        content: str,
        *,
        message: str,
        committer: Committer,
    ) -> Result[PublishAction, FormulaError]:
        payload = content.encode("utf-8")
        current = self._store.get_file(tap.owner, tap.repo, path)

        if isinstance(current, Err):
            # Only a definitive 404 means "first publish"; an outage must not
            # be mistaken for it.
            if not current.error.is_not_found:
                return Err(_remote_error("reading", tap, path, current.error))

            created = self._store.create_file(
                tap.owner,
                tap.repo,
                path,
                content=payload,
                message=message,
                committer_name=committer.name,
                committer_email=committer.email,
            )
            if isinstance(created, Err):
                if created.error.is_conflict:
                    return Err(_conflict(tap, path, created.error))
                return Err(_remote_error("creating", tap, path, created.error))
            return Ok(PublishAction(created=True, path=path))

        updated = self._store.update_file(
            tap.owner,
            tap.repo,
            path,
            content=payload,
            message=message,
            committer_name=committer.name,
            committer_email=committer.email,
            sha=current.value.sha,
        )
        if isinstance(updated, Err):
            if updated.error.is_conflict:
                return Err(_conflict(tap, path, updated.error))
            return Err(_remote_error("updating", tap, path, updated.error))
        return Ok(PublishAction(created=False, path=path))


def _conflict(tap: TapRepo, path: str, error: ContentsError) -> FormulaError:
    return FormulaError(
        kind="concurrent_modification",
        message=f"{tap.slug}/{path} changed while publishing: {error.message}",
        hint="another release wrote this formula concurrently; re-run once it finishes",
    )

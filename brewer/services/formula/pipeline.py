"""Formula pipeline: hash -> assemble -> render -> write -> publish.

Each step returns a Result and the first Err stops the run. The local
formula file is always written before anything is sent to GitHub, so a
failed write never leads to a publish.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from brewer.core.result import Err, Ok, Result
from brewer.git.repository import Repository
from brewer.github.contents import ContentStore
from brewer.output.console import ConsoleProtocol, Style
from brewer.platform.files import atomic_write_text
from brewer.services.formula.digest import sha256_file
from brewer.services.formula.errors import FormulaError
from brewer.services.formula.model import Artifact, FormulaData, ReleaseMetadata
from brewer.services.formula.naming import formula_class_name, split_lines
from brewer.services.formula.publish import FormulaPublisher, PublishAction
from brewer.services.formula.render import render_formula

__all__ = [
    "FormulaOutcome",
    "artifact_name",
    "commit_message",
    "create_formula",
    "formula_data_for",
    "resolve_artifact",
    "validate_metadata",
]


@dataclass(frozen=True, slots=True)
class FormulaOutcome:
    local_path: Path
    sha256: str
    published: PublishAction | None


def artifact_name(name: str, *, os_name: str, arch: str) -> str:
    return f"{name}-{os_name}-{arch}"


def resolve_artifact(
    *,
    repo_root: Path,
    name: str,
    dist_dir: Path,
    os_name: str,
    arch: str,
) -> Result[Artifact, FormulaError]:
    """Locate the built binary for the tag at HEAD.

    The binary is expected at ``<dist>/<name>/<name>-<os>-<arch>``.
    """
    tag = Repository(repo_root).tag_at_head()
    if isinstance(tag, Err):
        return Err(
            FormulaError(
                kind="git_error",
                message=f"cannot resolve release tag: {tag.error.message}",
                hint="tag the release commit first, e.g. git tag v1.0.0"
                if tag.error.returncode == 0
                else None,
            )
        )

    binary = artifact_name(name, os_name=os_name, arch=arch)
    return Ok(Artifact(name=binary, path=dist_dir / name / binary, version=tag.value))


def commit_message(artifact: Artifact) -> str:
    return f"Brew formula update for {artifact.name} version {artifact.version}"


def validate_metadata(metadata: ReleaseMetadata) -> Result[None, FormulaError]:
    if not metadata.formula_name:
        return Err(FormulaError(kind="config_error", message="repo (or name) is required"))
    if metadata.skip_upload:
        return Ok(None)

    missing = [
        flag
        for flag, value in (
            ("--owner", metadata.owner),
            ("--repo", metadata.repo),
            ("--brew-owner", metadata.tap.owner),
            ("--brew-repo", metadata.tap.repo),
        )
        if not value.strip()
    ]
    if missing:
        return Err(
            FormulaError(
                kind="config_error",
                message=f"missing required value(s) for publishing: {', '.join(missing)}",
                hint="pass --skip-upload to only write the formula locally",
            )
        )
    return Ok(None)


def formula_data_for(metadata: ReleaseMetadata, artifact: Artifact, sha256: str) -> FormulaData:
    install = split_lines(metadata.install)
    if not install:
        install = (f'bin.install "{artifact.name}" => "{metadata.formula_name}"',)

    return FormulaData(
        class_name=formula_class_name(metadata.formula_name),
        description=metadata.description,
        homepage=metadata.homepage,
        owner=metadata.owner,
        repo=metadata.repo,
        tag=artifact.version,
        version=artifact.version,
        file=artifact.name,
        sha256=sha256,
        install=install,
        caveats=split_lines(metadata.caveats),
        dependencies=tuple(d.strip() for d in metadata.dependencies if d.strip()),
        conflicts=tuple(c.strip() for c in metadata.conflicts if c.strip()),
        test=split_lines(metadata.test),
        plist=metadata.plist,
    )


def create_formula(
    metadata: ReleaseMetadata,
    artifact: Artifact,
    *,
    out_dir: Path,
    console: ConsoleProtocol,
    store: ContentStore | None = None,
) -> Result[FormulaOutcome, FormulaError]:
    """Render the formula for ``artifact``, store it locally and publish it.

    ``store`` may be None only when ``metadata.skip_upload`` is set.
    """
    valid = validate_metadata(metadata)
    if isinstance(valid, Err):
        return valid
    if store is None and not metadata.skip_upload:
        return Err(
            FormulaError(kind="config_error", message="no GitHub client configured for publishing")
        )

    digest = sha256_file(artifact.path)
    if isinstance(digest, Err):
        return digest
    console.print(f"sha256 {digest.value}  {artifact.path}", Style.DIM)

    rendered = render_formula(formula_data_for(metadata, artifact, digest.value))
    if isinstance(rendered, Err):
        return rendered

    local_path = out_dir / metadata.formula_filename
    try:
        atomic_write_text(local_path, rendered.value)
    except OSError as e:
        return Err(
            FormulaError(
                kind="io_error",
                message=f"cannot write formula: {local_path}",
                hint=e.strerror or str(e),
            )
        )
    console.success(f"wrote {local_path}")

    if metadata.skip_upload or store is None:
        console.info("upload skipped")
        return Ok(FormulaOutcome(local_path=local_path, sha256=digest.value, published=None))

    published = FormulaPublisher(store).publish(
        metadata.tap,
        metadata.tap_path,
        rendered.value,
        message=commit_message(artifact),
        committer=metadata.committer,
    )
    if isinstance(published, Err):
        return published

    console.success(f"{published.value.verb} {metadata.tap.slug}/{published.value.path}")
    return Ok(
        FormulaOutcome(local_path=local_path, sha256=digest.value, published=published.value)
    )

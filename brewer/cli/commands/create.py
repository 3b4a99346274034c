"""Create command - render a Homebrew formula and push it to a tap."""

from __future__ import annotations

import os
from pathlib import Path
from typing import NoReturn

import typer

from brewer.cli.context import CLIContext, build_context
from brewer.core.errors import ErrorCode
from brewer.core.result import Err
from brewer.github.contents import ContentStore, GitHubContentStore
from brewer.github.credentials import credentials_from_env
from brewer.output.console import Style
from brewer.output.errors import formula_error_exit_code, print_formula_error
from brewer.services.formula.errors import FormulaError
from brewer.services.formula.model import Committer, ReleaseMetadata, TapRepo
from brewer.services.formula.pipeline import create_formula, resolve_artifact, validate_metadata


def _fail(error: FormulaError, ctx: CLIContext) -> NoReturn:
    print_formula_error(error, ctx.console)
    raise typer.Exit(code=formula_error_exit_code(error))


def create(
    owner: str = typer.Option("", "--owner", help="Current repo owner"),
    repo: str = typer.Option("", "--repo", help="Current repo name"),
    name: str | None = typer.Option(
        None, "--name", help="Formula name (defaults to --repo)", show_default=False
    ),
    brew_owner: str | None = typer.Option(
        None, "--brew-owner", help="Owner of the repository to push the tap to"
    ),
    brew_repo: str | None = typer.Option(
        None, "--brew-repo", help="Repository to push the tap to"
    ),
    author: str | None = typer.Option(None, "--author", help="Committer name"),
    email: str | None = typer.Option(None, "--email", help="Committer email"),
    folder: str | None = typer.Option(
        None,
        "--folder",
        help="Folder inside the repository to put the formula. Default is the root folder.",
    ),
    homepage: str | None = typer.Option(None, "--homepage", help="Your app's homepage"),
    description: str = typer.Option("", "--description", help="Your app's description"),
    caveats: str = typer.Option("", "--caveats", help="Caveats for the user of your binary"),
    install: str = typer.Option(
        "",
        "--install",
        help="Install block, one statement per line (default: bin.install of the artifact)",
    ),
    test: str = typer.Option("", "--test", help="Formula test block, one statement per line"),
    plist: str = typer.Option("", "--plist", help="launchd plist for a background service"),
    dependencies: list[str] | None = typer.Option(
        None, "--dependencies", help="Packages your package depends on (repeatable)"
    ),
    conflicts: list[str] | None = typer.Option(
        None, "--conflicts", help="Packages that conflict with your package (repeatable)"
    ),
    dist_dir: Path | None = typer.Option(
        None, "--dist-dir", help="Directory holding built binaries and the formula output"
    ),
    os_name: str | None = typer.Option(None, "--os", help="Artifact OS (e.g. darwin)"),
    arch: str | None = typer.Option(None, "--arch", help="Artifact arch (e.g. amd64)"),
    skip_upload: bool = typer.Option(
        False,
        "--skip-upload",
        help="Formula will not be published, will be stored on the dist folder only.",
    ),
    config: Path | None = typer.Option(
        None, "--config", help=".brewer.toml to read defaults from", show_default=False
    ),
) -> None:
    """Create or update the Homebrew formula for the release at HEAD."""
    ctx = build_context(config)
    cfg = ctx.config

    metadata = ReleaseMetadata(
        owner=owner.strip(),
        repo=repo.strip(),
        name=(name or "").strip(),
        homepage=homepage if homepage is not None else cfg.formula.homepage,
        description=description,
        install=install,
        caveats=caveats,
        test=test,
        plist=plist,
        folder=(folder if folder is not None else cfg.tap.folder).strip("/"),
        dependencies=tuple(dependencies or ()),
        conflicts=tuple(conflicts or ()),
        tap=TapRepo(
            owner=brew_owner if brew_owner is not None else cfg.tap.owner,
            repo=brew_repo if brew_repo is not None else cfg.tap.repo,
        ),
        committer=Committer(
            name=author if author is not None else cfg.committer.name,
            email=email if email is not None else cfg.committer.email,
        ),
        skip_upload=skip_upload,
    )

    valid = validate_metadata(metadata)
    if isinstance(valid, Err):
        _fail(valid.error, ctx)

    store: ContentStore | None = None
    if not metadata.skip_upload:
        creds = credentials_from_env(os.environ)
        if isinstance(creds, Err):
            ctx.console.error(creds.error.message)
            if creds.error.hint:
                ctx.console.print(f"hint: {creds.error.hint}", Style.DIM)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
        store = GitHubContentStore(creds.value)

    dist = ctx.root / (dist_dir if dist_dir is not None else Path(cfg.paths.dist))
    artifact = resolve_artifact(
        repo_root=ctx.root,
        name=metadata.formula_name,
        dist_dir=dist,
        os_name=os_name or cfg.formula.os,
        arch=arch or cfg.formula.arch,
    )
    if isinstance(artifact, Err):
        _fail(artifact.error, ctx)

    ctx.console.info(f"{artifact.value.name} {artifact.value.version}")
    result = create_formula(
        metadata,
        artifact.value,
        out_dir=dist,
        console=ctx.console,
        store=store,
    )
    if isinstance(result, Err):
        _fail(result.error, ctx)

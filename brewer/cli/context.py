from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from brewer.core.config import CONFIG_FILENAME, Config, load_config, load_config_or_default
from brewer.core.errors import ErrorCode
from brewer.core.result import Err
from brewer.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: Config
    console: ConsoleProtocol


def build_context(config_path: Path | None = None) -> CLIContext:
    """Resolve the working directory and load config.

    An explicit ``--config`` must exist; the implicit ``.brewer.toml`` is optional.
    """
    root = Path.cwd()
    if config_path is not None:
        config_result = load_config(config_path.expanduser())
    else:
        config_result = load_config_or_default(root / CONFIG_FILENAME)

    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(root=root, config=config_result.value, console=RichConsole())

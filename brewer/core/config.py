"""Typed configuration loading.

An optional ``.brewer.toml`` supplies project-wide defaults for the tap,
committer identity and formula fields so release pipelines don't have to
repeat them as flags. Command-line flags always win over the file.

Example:
    [tap]
    owner = "appscode"
    repo = "homebrew-tap"
    folder = "Formula"

    [committer]
    name = "1gtm"
    email = "1gtm@appscode.com"

    [formula]
    homepage = "https://appscode.com"
    os = "darwin"
    arch = "amd64"

    [paths]
    dist = "dist"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "CommitterConfig",
    "FormulaConfig",
    "PathsConfig",
    "TapConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = ".brewer.toml"

DEFAULT_TAP_OWNER = "appscode"
DEFAULT_TAP_REPO = "homebrew-tap"
DEFAULT_COMMITTER_NAME = "1gtm"
DEFAULT_COMMITTER_EMAIL = "1gtm@appscode.com"
DEFAULT_HOMEPAGE = "https://appscode.com"
DEFAULT_OS = "darwin"
DEFAULT_ARCH = "amd64"
DEFAULT_DIST_DIR = "dist"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class TapConfig:
    """Repository the formula is pushed to."""

    owner: str = DEFAULT_TAP_OWNER
    repo: str = DEFAULT_TAP_REPO
    folder: str = ""


@dataclass(frozen=True, slots=True)
class CommitterConfig:
    name: str = DEFAULT_COMMITTER_NAME
    email: str = DEFAULT_COMMITTER_EMAIL


@dataclass(frozen=True, slots=True)
class FormulaConfig:
    """Formula defaults. ``os``/``arch`` select the single artifact variant."""

    homepage: str = DEFAULT_HOMEPAGE
    os: str = DEFAULT_OS
    arch: str = DEFAULT_ARCH


@dataclass(frozen=True, slots=True)
class PathsConfig:
    dist: str = DEFAULT_DIST_DIR


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    tap: TapConfig = field(default_factory=TapConfig)
    committer: CommitterConfig = field(default_factory=CommitterConfig)
    formula: FormulaConfig = field(default_factory=FormulaConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        tap: StrDict = get_table(data, "tap") or {}
        committer: StrDict = get_table(data, "committer") or {}
        formula: StrDict = get_table(data, "formula") or {}
        paths: StrDict = get_table(data, "paths") or {}

        return cls(
            tap=TapConfig(
                owner=get_str(tap, "owner") or DEFAULT_TAP_OWNER,
                repo=get_str(tap, "repo") or DEFAULT_TAP_REPO,
                folder=(get_str(tap, "folder") or "").strip("/"),
            ),
            committer=CommitterConfig(
                name=get_str(committer, "name") or DEFAULT_COMMITTER_NAME,
                email=get_str(committer, "email") or DEFAULT_COMMITTER_EMAIL,
            ),
            formula=FormulaConfig(
                homepage=get_str(formula, "homepage") or DEFAULT_HOMEPAGE,
                os=get_str(formula, "os") or DEFAULT_OS,
                arch=get_str(formula, "arch") or DEFAULT_ARCH,
            ),
            paths=PathsConfig(
                dist=get_str(paths, "dist") or DEFAULT_DIST_DIR,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the config file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config if the file exists, otherwise return built-in defaults.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)

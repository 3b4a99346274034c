"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from brewer.core.errors import ErrorCode
from brewer.output.console import Style
from brewer.services.formula.errors import FormulaError

if TYPE_CHECKING:
    from brewer.output.console import ConsoleProtocol

__all__ = ["print_formula_error", "formula_error_exit_code"]


def print_formula_error(error: FormulaError, console: ConsoleProtocol) -> None:
    """Print a pipeline error, with its hint dimmed on the next line."""
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def formula_error_exit_code(error: FormulaError) -> int:
    match error.kind:
        case "config_error":
            return int(ErrorCode.USER_ERROR)
        case "git_error":
            return int(ErrorCode.ENV_ERROR)
        case "template_error":
            return int(ErrorCode.RENDER_ERROR)
        case "remote_api_error":
            return int(ErrorCode.NETWORK_ERROR)
        case "io_error":
            return int(ErrorCode.IO_ERROR)
        case "concurrent_modification":
            return int(ErrorCode.CONFLICT)

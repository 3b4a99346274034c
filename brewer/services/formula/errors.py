from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

FormulaErrorKind = Literal[
    "io_error",
    "config_error",
    "git_error",
    "template_error",
    "remote_api_error",
    "concurrent_modification",
]


@dataclass(frozen=True, slots=True)
class FormulaError:
    kind: FormulaErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message

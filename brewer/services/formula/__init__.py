"""Homebrew formula generation and publishing."""

from brewer.services.formula.digest import sha256_file
from brewer.services.formula.errors import FormulaError
from brewer.services.formula.model import (
    Artifact,
    Committer,
    FormulaData,
    ReleaseMetadata,
    TapRepo,
)
from brewer.services.formula.naming import formula_class_name, split_lines
from brewer.services.formula.pipeline import FormulaOutcome, create_formula, resolve_artifact
from brewer.services.formula.publish import FormulaPublisher, PublishAction
from brewer.services.formula.render import render_formula

__all__ = [
    "Artifact",
    "Committer",
    "FormulaData",
    "FormulaError",
    "FormulaOutcome",
    "FormulaPublisher",
    "PublishAction",
    "ReleaseMetadata",
    "TapRepo",
    "create_formula",
    "formula_class_name",
    "render_formula",
    "resolve_artifact",
    "sha256_file",
    "split_lines",
]

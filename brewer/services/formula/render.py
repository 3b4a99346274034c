"""Homebrew formula rendering.

The formula is assembled from fixed sections. Each optional section
(depends_on, conflicts_with, caveats, plist, test) is emitted only when its
field is non-empty, so two renders of the same FormulaData are always
byte-identical and GitHub's diff shows exactly what changed between releases.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from string import Template

from brewer.core.result import Err, Ok, Result
from brewer.services.formula.errors import FormulaError
from brewer.services.formula.model import FormulaData

__all__ = ["render_formula"]

_INDENT = "  "

_HEADER = Template(
    """class $class_name < Formula
  desc "$desc"
  homepage "$homepage"
  url "$url"
  version "$version"
  sha256 "$sha256"
"""
)

_INSTALL = Template(
    """
  def install
$body
  end
"""
)

_CAVEATS = Template(
    """
  def caveats; <<~EOS
$body
  EOS
  end
"""
)

_PLIST = Template(
    """
  plist_options :startup => false

  def plist; <<~EOS
$body
  EOS
  end
"""
)

_TEST = Template(
    """
  test do
$body
  end
"""
)

_FOOTER = "end\n"


def _quote(value: str) -> str:
    """Escape a value for use inside a double-quoted Ruby string."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _indented(lines: Iterable[str], depth: int) -> str:
    prefix = _INDENT * depth
    return "\n".join(f"{prefix}{ln}" if ln else "" for ln in lines)


def _fill(
    section: str, template: Template, values: Mapping[str, str]
) -> Result[str, FormulaError]:
    try:
        return Ok(template.substitute(values))
    except (KeyError, ValueError) as e:
        return Err(
            FormulaError(
                kind="template_error",
                message=f"formula template section '{section}' is malformed: {e}",
                hint="this is a packaging bug in brewer, not an input problem",
            )
        )


def _statements(keyword: str, values: tuple[str, ...]) -> str:
    body = _indented((f'{keyword} "{_quote(v)}"' for v in values), 1)
    return f"\n{body}\n"


def render_formula(data: FormulaData) -> Result[str, FormulaError]:
    """Render the Ruby formula for ``data``."""
    parts: list[str] = []

    header = _fill(
        "header",
        _HEADER,
        {
            "class_name": data.class_name,
            "desc": _quote(data.description),
            "homepage": _quote(data.homepage),
            "url": _quote(data.download_url),
            "version": _quote(data.version),
            "sha256": data.sha256,
        },
    )
    if isinstance(header, Err):
        return header
    parts.append(header.value)

    if data.dependencies:
        parts.append(_statements("depends_on", data.dependencies))
    if data.conflicts:
        parts.append(_statements("conflicts_with", data.conflicts))

    sections: list[tuple[str, Template, str]] = [
        ("install", _INSTALL, _indented(data.install, 2)),
    ]
    if data.caveats:
        sections.append(("caveats", _CAVEATS, _indented(data.caveats, 2)))
    if data.plist.strip():
        plist_lines = [ln.rstrip() for ln in data.plist.strip().splitlines()]
        sections.append(("plist", _PLIST, _indented(plist_lines, 2)))
    if data.test:
        sections.append(("test", _TEST, _indented(data.test, 2)))

    for name, template, body in sections:
        filled = _fill(name, template, {"body": body})
        if isinstance(filled, Err):
            return filled
        parts.append(filled.value)

    parts.append(_FOOTER)
    return Ok("".join(parts))

from __future__ import annotations


def formula_class_name(name: str) -> str:
    """Turn a package name into the Ruby class name Homebrew expects.

    `my-cool_tool` -> `MyCoolTool`. Only the first letter of each word is
    touched; the rest keeps its casing.
    """
    words = name.replace("-", " ").replace("_", " ").split()
    return "".join(w[:1].upper() + w[1:] for w in words)


def split_lines(text: str) -> tuple[str, ...]:
    """Split a multi-line flag value into trimmed, non-empty lines."""
    return tuple(ln.strip() for ln in text.splitlines() if ln.strip())

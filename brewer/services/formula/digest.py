"""SHA-256 content addressing of release artifacts."""

from __future__ import annotations

import hashlib
from pathlib import Path

from brewer.core.result import Err, Ok, Result
from brewer.services.formula.errors import FormulaError

_CHUNK_SIZE = 1024 * 1024


def sha256_file(path: Path) -> Result[str, FormulaError]:
    """Hash the whole file at ``path`` and return the lowercase hex digest.

    A read failure part way through yields an error, never a digest of the
    bytes read so far.
    """
    h = hashlib.sha256()
    try:
        with path.open("rb") as f:
            for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
                h.update(chunk)
    except OSError as e:
        return Err(
            FormulaError(
                kind="io_error",
                message=f"cannot read artifact: {path}",
                hint=e.strerror or str(e),
            )
        )
    return Ok(h.hexdigest())

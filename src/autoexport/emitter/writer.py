"""
Render named-export statements and write them back to source files.

The default options reproduce the bare `export { a, b }` form with no
terminator. Callers wanting a statement ready to paste into a file can ask for
a trailing semicolon and newline.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmitOptions:
    semicolon: bool = False
    trailing_newline: bool = False


def render_named_export(
    names: Sequence[str], options: Optional[EmitOptions] = None
) -> str:
    """
    Render `export { n1, n2 }` for the given names, in order.

    No de-duplication happens here, and an empty sequence renders as
    `export {  }`.
    """
    options = options or EmitOptions()

    buffer = io.StringIO()
    buffer.write(f"export {{ {', '.join(names)} }}")
    if options.semicolon:
        buffer.write(";")
    if options.trailing_newline:
        buffer.write("\n")
    return buffer.getvalue()


def append_statement(path: Union[str, Path], statement: str) -> Path:
    """Append `statement` to `path` on its own line."""
    path = Path(path)
    existing = path.read_text(encoding="utf-8") if path.exists() else ""

    buffer = io.StringIO()
    if existing and not existing.endswith("\n"):
        buffer.write("\n")
    buffer.write(statement.rstrip("\n"))
    buffer.write("\n")

    with path.open("a", encoding="utf-8") as handle:
        handle.write(buffer.getvalue())
    logger.debug("Appended export statement to %s", path)
    return path


__all__ = ["EmitOptions", "append_statement", "render_named_export"]

"""Utilities for emitting export statements."""

from .writer import EmitOptions, append_statement, render_named_export

__all__ = ["EmitOptions", "append_statement", "render_named_export"]

"""Front-end pipeline glue for parsing and export analysis."""

from .pipeline import FrontEndResult, run_frontend

__all__ = ["FrontEndResult", "run_frontend"]

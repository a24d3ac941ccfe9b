from __future__ import annotations  # Session report package exports

from .pdf import generate_results_pdf

__all__ = ["generate_results_pdf"]

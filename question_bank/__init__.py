from __future__ import annotations  # Fallback question bank exports

from .bank import DEFAULT_BANK_PATH, BankEntry, BankFile, FallbackQuestionBank, default_bank
from .competencies import ROLE_COMPETENCIES, competencies_for

__all__ = [
    "DEFAULT_BANK_PATH",
    "BankEntry",
    "BankFile",
    "FallbackQuestionBank",
    "default_bank",
    "ROLE_COMPETENCIES",
    "competencies_for",
]

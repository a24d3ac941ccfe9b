"""Static fallback question taxonomy used when generation is unavailable."""
from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from pydantic import Field

from interview_session.models import CamelModel, Difficulty, Question, code_token, mint_id


logger = logging.getLogger(__name__)

DEFAULT_BANK_PATH = Path(__file__).resolve().parent / "data" / "fallback_questions.json"


class BankEntry(CamelModel):  # Authored question template
    id: str
    text: str = Field(min_length=1)
    topic: Optional[str] = None
    expected_keywords: List[str] = Field(default_factory=list)
    sample_answers: List[str] = Field(default_factory=list)
    time_limit: int = Field(default=240, gt=0)
    max_score: float = Field(default=10, gt=0)


class BankFile(CamelModel):  # position -> category -> difficulty -> entries
    version: str
    positions: Dict[str, Dict[str, Dict[Difficulty, List[BankEntry]]]]


class FallbackQuestionBank:
    """Lookup over (position, category, difficulty) question sets.

    Picks avoid question texts already asked when possible and always return a
    fresh copy with its own id and code.
    """

    def __init__(self, data: BankFile) -> None:
        self._data = data

    @classmethod
    def from_path(cls, path: Path = DEFAULT_BANK_PATH) -> "FallbackQuestionBank":
        raw = Path(path).read_text(encoding="utf-8")
        bank = cls(BankFile.model_validate_json(raw))
        logger.info("Loaded fallback bank version=%s positions=%d", bank.version, len(bank.positions()))
        return bank

    @property
    def version(self) -> str:
        return self._data.version

    def positions(self) -> List[str]:
        return list(self._data.positions.keys())

    def entries(self, position: str, category: str, difficulty: str) -> List[BankEntry]:
        by_category = self._data.positions.get(position)
        if by_category is None:
            return []
        by_difficulty = by_category.get(category)
        if by_difficulty is None:
            return []
        return list(by_difficulty.get(difficulty, []))  # type: ignore[arg-type]

    def pick(
        self,
        position: str,
        category: str,
        difficulty: str,
        used_texts: Iterable[str] = (),
        *,
        rng: Optional[random.Random] = None,
    ) -> Optional[Question]:
        candidates = self.entries(position, category, difficulty)
        if not candidates:
            return None
        used = set(used_texts)
        fresh = [entry for entry in candidates if entry.text not in used]
        pool = fresh or candidates
        entry = (rng or random).choice(pool)
        return Question(
            id=mint_id("fallback"),
            question_code=f"FB_{code_token(entry.id)}_{mint_id('x')[-6:].upper()}",
            category=category,
            difficulty=difficulty,  # type: ignore[arg-type]
            text=entry.text,
            expected_keywords=list(entry.expected_keywords),
            sample_answers=list(entry.sample_answers),
            time_limit=entry.time_limit,
            max_score=entry.max_score,
            role_specific=False,
            topic=entry.topic,
        )


_DEFAULT_BANK: Optional[FallbackQuestionBank] = None


def default_bank() -> FallbackQuestionBank:  # Lazily load the packaged bank
    global _DEFAULT_BANK
    if _DEFAULT_BANK is None:
        _DEFAULT_BANK = FallbackQuestionBank.from_path()
    return _DEFAULT_BANK


__all__ = ["BankEntry", "BankFile", "FallbackQuestionBank", "default_bank", "DEFAULT_BANK_PATH"]

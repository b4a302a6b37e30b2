"""
Doménové objekty kvízu nezávislé na databázi.

 - SpeciesRecord: neměnný snímek ptáka z katalogu,
 - Question: jedna vygenerovaná otázka (správný pták, možnosti, médium),
 - Attempt: vyhodnocená odpověď na jednu otázku.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class SpeciesRecord:
    """Pták tak, jak ho vidí generátor otázek."""

    id: int
    name_local: str
    name_latin: str
    group: int
    media_practice: Tuple[str, ...] = ()
    media_test: Tuple[str, ...] = ()

    def media_pool(self, official: bool) -> Tuple[str, ...]:
        """Fotografie pro oficiální test, nebo pro procvičování."""
        return self.media_test if official else self.media_practice


@dataclass(frozen=True)
class Question:
    """
    Jedna otázka kvízu.

    Možnosti vždy obsahují správného ptáka právě jednou a žádné dvě možnosti
    nesdílejí id ani zobrazovaný název. Prázdné ``media_url`` znamená,
    že se místo média zobrazí zástupný text.
    """

    correct: SpeciesRecord
    options: Tuple[SpeciesRecord, ...]
    media_url: str = ""
    media_key: str = ""
    author: Optional[str] = None

    def option_by_id(self, option_id: int) -> Optional[SpeciesRecord]:
        for option in self.options:
            if option.id == option_id:
                return option
        return None

    def to_payload(self) -> dict:
        """Data pro klienta - bez prozrazení správné odpovědi."""
        return {
            "options": [
                {"id": o.id, "name": o.name_local, "latin": o.name_latin}
                for o in self.options
            ],
            "media_url": self.media_url,
            "media_available": bool(self.media_url),
            "author": self.author,
        }


@dataclass(frozen=True)
class Attempt:
    """
    Vyhodnocená odpověď na otázku.

    ``selected`` je None, pokud uživatel zvolil „nevím“ nebo nestihl nic vybrat.
    Správnost se určuje podle id ptáka, ne podle názvu.
    """

    question: Question
    selected: Optional[SpeciesRecord]
    is_correct: bool
    points: int
    timed_out: bool = field(default=False)

    @property
    def user_answer(self) -> Optional[str]:
        return self.selected.name_local if self.selected is not None else None

    @property
    def correct_answer(self) -> str:
        return self.question.correct.name_local

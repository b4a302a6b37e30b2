"""
Bodování odpovědí a souhrn dokončeného kvízu.

Bodování:
 - správná odpověď: +1 bod,
 - špatná odpověď: -1 bod,
 - „nevím“ nebo žádná odpověď: 0 bodů.

Úspěšnost je podíl bodů z maximálně možného počtu (počet otázek),
záporný součet se zobrazuje jako 0 %.
"""
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .constants import SUCCESS_THRESHOLD


def points_for(selected, correct) -> int:
    """Body za vybranou možnost (None = „nevím“)."""
    if selected is None:
        return 0
    return 1 if selected.id == correct.id else -1


def success_rate(total_points: int, question_count: int) -> int:
    """
    Úspěšnost v procentech, zaokrouhlená s polovinami nahoru.

    Příklad: 5 bodů z 8 otázek = 62.5 % -> 63 %; -3 body -> 0 %.
    """
    if question_count <= 0:
        return 0
    return max(0, math.floor(100 * total_points / question_count + 0.5))


@dataclass(frozen=True)
class QuizOutcome:
    """Výsledek dokončeného kvízu připravený k uložení i zobrazení."""

    user_email: str
    quiz_type: str
    is_official: bool
    question_count: int
    total_points: int
    breakdown: List[dict] = field(default_factory=list)

    @property
    def success_rate(self) -> int:
        return success_rate(self.total_points, self.question_count)

    @property
    def is_successful(self) -> bool:
        return self.success_rate >= SUCCESS_THRESHOLD

    def to_payload(self) -> dict:
        return {
            "question_count": self.question_count,
            "total_points": self.total_points,
            "success_rate": self.success_rate,
            "is_successful": self.is_successful,
            "is_official": self.is_official,
            "quiz_type": self.quiz_type,
            "attempts": self.breakdown,
        }


def breakdown_row(attempt) -> dict:
    """Jeden řádek rozpisu výsledku (ukládá se jako JSON)."""
    return {
        "question": attempt.correct_answer,
        "user_answer": attempt.user_answer,
        "correct_answer": attempt.correct_answer,
        "points": attempt.points,
    }


def aggregate(
    attempts: Sequence,
    user_email: str,
    quiz_type: str,
    is_official: bool = False,
    question_count: Optional[int] = None,
) -> QuizOutcome:
    """Sečte body všech odpovědí a sestaví rozpis po otázkách."""
    return QuizOutcome(
        user_email=user_email,
        quiz_type=quiz_type,
        is_official=is_official,
        question_count=question_count if question_count is not None else len(attempts),
        total_points=sum(attempt.points for attempt in attempts),
        breakdown=[breakdown_row(attempt) for attempt in attempts],
    )

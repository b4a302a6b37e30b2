"""
Ukládání výsledků dokončených kvízů.

Selhání uložení není pro uživatele blokující - výsledek vidí na obrazovce
i tehdy, když se ho nepodařilo zapsat do databáze.
"""
import logging

from django.db import DatabaseError

from .exceptions import PersistenceError
from .models import QuizResult

logger = logging.getLogger(__name__)


def persist_outcome(outcome):
    """
    Zapíše výsledek do databáze.

    Raises:
        PersistenceError: Zápis selhal
    """
    if not outcome.user_email:
        raise PersistenceError("Korisnik nije prijavljen.")
    try:
        return QuizResult.objects.create(
            user_email=outcome.user_email,
            question_count=outcome.question_count,
            total_points=outcome.total_points,
            is_official=outcome.is_official,
            quiz_type=outcome.quiz_type,
            breakdown=outcome.breakdown,
        )
    except DatabaseError as exc:
        raise PersistenceError("Greška pri čuvanju rezultata.") from exc


def record_outcome(outcome):
    """
    Uloží výsledek a chybu jen zaloguje.

    Returns:
        QuizResult, nebo None pokud se uložení nepovedlo
    """
    try:
        result = persist_outcome(outcome)
    except PersistenceError:
        logger.exception("Výsledek kvízu pro %s se nepodařilo uložit.", outcome.user_email or "-")
        return None
    logger.info(
        "Uložen výsledek %s: %s/%s bodů (%s, oficiální=%s).",
        outcome.user_email, outcome.total_points, outcome.question_count,
        outcome.quiz_type, outcome.is_official,
    )
    return result

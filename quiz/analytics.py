"""
Souhrnné statistiky výsledků pro administrátora.
"""
from collections import Counter

from .models import QuizResult, QuizType


def summarize_results(queryset=None, top_missed=10):
    """
    Spočítá přehled všech uložených výsledků.

    Returns:
        Slovník s klíči:
        - total: Počet výsledků
        - users: Počet různých uživatelů
        - average_success_rate: Průměrná úspěšnost v procentech (celé číslo)
        - by_type: Počty a průměry podle typu kvízu a režimu (oficiální / procvičování)
        - most_missed: Ptáci, u kterých se nejčastěji chybovalo, s počty chyb
    """
    results = list(queryset if queryset is not None else QuizResult.objects.all())

    by_type = {}
    for value, label in QuizType.choices:
        for is_official in (False, True):
            rows = [r for r in results if r.quiz_type == value and r.is_official == is_official]
            by_type[(value, is_official)] = {
                "label": label,
                "is_official": is_official,
                "count": len(rows),
                "average_success_rate": _average([r.success_rate for r in rows]),
            }

    # Chyba = jiná odpověď než správná, nebo žádná odpověď
    missed = Counter()
    for result in results:
        for row in result.breakdown or []:
            if row.get("user_answer") != row.get("correct_answer"):
                missed[row.get("correct_answer") or row.get("question")] += 1

    return {
        "total": len(results),
        "users": len({r.user_email.lower() for r in results}),
        "average_success_rate": _average([r.success_rate for r in results]),
        "by_type": list(by_type.values()),
        "most_missed": missed.most_common(top_missed),
    }


def _average(values):
    if not values:
        return 0
    return round(sum(values) / len(values))

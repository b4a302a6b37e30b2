"""
Konfigurace Django aplikace pro kvíz „Ptice Srbije“.

Tento modul definuje konfiguraci aplikace 'quiz', která obsahuje
katalog ptáků, generátor otázek, běh kvízu a ukládání výsledků.
"""
from django.apps import AppConfig


class QuizConfig(AppConfig):
    """
    Konfigurace aplikace quiz.

    Při startu aplikace načte signály pro skupinu Admin
    a kontrolu seznamu povolených uživatelů.
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'quiz'
    verbose_name = "Ptice Srbije"

    def ready(self):
        from . import signals  # noqa: F401

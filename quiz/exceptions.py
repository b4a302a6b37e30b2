"""
Výjimky kvízové aplikace.

Chyby při generování kvízu zastaví jeho spuštění, ostatní chyby během
běžícího kvízu se zachytí lokálně a kvíz pokračuje.
"""


class QuizError(Exception):
    """Společný předek všech chyb kvízu."""


class CatalogInsufficientError(QuizError):
    """V katalogu je méně ptáků, než je potřeba pro sestavení otázky."""

    def __init__(self, available, required):
        self.available = available
        self.required = required
        super().__init__(
            f"Nema dovoljno ptica u bazi za generisanje kviza (potrebno je bar {required})."
        )


class PersistenceError(QuizError):
    """Uložení výsledku kvízu selhalo."""


class MediaUnavailableError(QuizError):
    """Pro otázku nelze sestavit adresu zvuku nebo obrázku."""


class OfficialTestUnavailableError(QuizError):
    """Oficiální test není aktivní, nebo ho uživatel už absolvoval."""

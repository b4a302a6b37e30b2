"""
Sestavení adres médií (zvuky a fotografie ptáků) a dohledání autora fotografie.

Adresy se skládají z pevné šablony úložiště; dostupnost souboru se neověřuje,
o náhradní zobrazení („médium není dostupné“) se stará šablona.
"""
import re
from typing import Optional
from urllib.parse import quote

from .constants import (
    AUDIO_EXTENSION,
    AUDIO_FOLDER,
    AUTHOR_CODES,
    IMAGE_EXTENSION,
    IMAGE_FOLDER,
)
from .exceptions import MediaUnavailableError

# Prefix autora: 2-3 velká písmena následovaná podtržítkem
AUTHOR_PREFIX_RE = re.compile(r"^([A-Z]{2,3})_")


def author_for(filename: str) -> Optional[str]:
    """
    Vrátí jméno autora fotografie podle prefixu názvu souboru.

    Neznámý nebo chybějící prefix není chyba, jen se autor nezobrazí.
    """
    if not filename:
        return None
    match = AUTHOR_PREFIX_RE.match(filename)
    if match:
        return AUTHOR_CODES.get(match.group(1))
    return None


class MediaLocator:
    """
    Převádí klíče médií na veřejné adresy v úložišti.

    Příklad: ``MediaLocator("https://cdn.example.com/public").audio_url("Parus major")``
    vrátí ``https://cdn.example.com/public/zvuk/Parus%20major.mp3``.
    """

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    def _build(self, folder: str, key: str, extension: str) -> str:
        return f"{self.base_url}/{folder}/{quote(key)}.{extension}"

    def audio_url(self, latin_name: str) -> str:
        """Adresa nahrávky hlasu je odvozena přímo z latinského názvu."""
        if not latin_name:
            raise MediaUnavailableError("Ptica nema latinski naziv, snimak nije dostupan.")
        return self._build(AUDIO_FOLDER, latin_name, AUDIO_EXTENSION)

    def image_url(self, key: str) -> str:
        """Adresa fotografie; klíč je název souboru bez přípony."""
        if not key:
            raise MediaUnavailableError("Slika nije dostupna.")
        return self._build(IMAGE_FOLDER, key, IMAGE_EXTENSION)

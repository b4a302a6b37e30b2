"""
Přístup ke katalogu ptáků a převod zápisu seznamu fotografií.
"""
from django.conf import settings
from django.db.models import Q

from .media import MediaLocator
from .models import Species


def load_catalog():
    """Celý katalog jako neměnné záznamy pro generátor otázek."""
    return [species.to_record() for species in Species.objects.all()]


def media_locator():
    """Převod klíčů médií podle nastavení PTICE_MEDIA_BASE_URL."""
    return MediaLocator(getattr(settings, "PTICE_MEDIA_BASE_URL", ""))


def search_species(term=""):
    """Hledání podle srbského nebo latinského názvu (bez ohledu na velikost písmen)."""
    queryset = Species.objects.all()
    term = (term or "").strip()
    if term:
        queryset = queryset.filter(Q(name_local__icontains=term) | Q(name_latin__icontains=term))
    return queryset.order_by("id")


def parse_media_list(value, separators=","):
    """
    Převede text „Parus_major_1, Parus_major_2“ na seznam názvů souborů.

    Mezery kolem položek se oříznou a prázdné položky vynechají.
    """
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = [value]
        for separator in separators:
            items = [part for item in items for part in item.split(separator)]
    return [item.strip() for item in items if item and item.strip()]


def format_media_list(items):
    return ", ".join(items or [])

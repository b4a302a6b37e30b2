"""
Produkční nastavení pro Django aplikaci.

Toto nastavení se používá při nasazení aplikace na produkční server.
Obsahuje optimalizace pro výkon a bezpečnost.
"""
from django.core.exceptions import ImproperlyConfigured

from .base import *  # noqa: F401,F403

# V produkci musí být DEBUG vypnutý kvůli bezpečnosti
DEBUG = False

# Tajný klíč se v produkci musí nastavit přes DJANGO_SECRET_KEY
if not SECRET_KEY:
    raise ImproperlyConfigured("Proměnná prostředí DJANGO_SECRET_KEY není nastavena.")

# ManifestStaticFilesStorage je doporučený v produkci, aby se zabránilo
# podávání zastaralých JavaScript / CSS souborů z cache
# (např. po upgradu Wagtail).
# Viz: https://docs.djangoproject.com/en/4.2/ref/contrib/staticfiles/#manifeststaticfilesstorage
STORAGES["staticfiles"]["BACKEND"] = "django.contrib.staticfiles.storage.ManifestStaticFilesStorage"

SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

# Načtení lokálních nastavení (pokud existují)
# Umožňuje přepsat nastavení pro konkrétní produkční prostředí
try:
    from .local import *  # noqa: F401,F403
except ImportError:
    pass

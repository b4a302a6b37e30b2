"""
Nastavení pro testy (pytest-django).

Databáze je SQLite v paměti a hesla se hashují rychlým algoritmem.
"""
from .base import *  # noqa: F401,F403

DEBUG = False
SECRET_KEY = "ptice-srbije-test"
ALLOWED_HOSTS = ["testserver", "localhost"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

PTICE_MEDIA_BASE_URL = "https://media.example.org"
PTICE_SOCKETIO_URL = "http://localhost:8001"

# caplog zachytává záznamy přes root logger
LOGGING["loggers"]["quiz"]["propagate"] = True  # noqa: F405

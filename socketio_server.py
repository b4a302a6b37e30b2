"""
Samostatný Socket.IO server pro real-time běh kvízu.

Spuštění:
    python socketio_server.py

Server řídí odpočet otázek a ukládá výsledky; Django nastavení
a databázi sdílí s webovou aplikací.
"""
import eventlet

eventlet.monkey_patch()

import logging  # noqa: E402
import os  # noqa: E402

import django  # noqa: E402
import eventlet.wsgi  # noqa: E402
import socketio  # noqa: E402

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "pticeapp.settings.dev")
django.setup()

from django.conf import settings  # noqa: E402

from quiz.socketio_handler import register_handlers  # noqa: E402

logger = logging.getLogger("quiz.socketio_server")


def cors_origins(value):
    """„*“ povolí všechny originy, jinak seznam oddělený čárkou."""
    if value.strip() == "*":
        return "*"
    return [origin.strip() for origin in value.split(",") if origin.strip()]


sio = socketio.Server(
    cors_allowed_origins=cors_origins(settings.PTICE_SOCKETIO_CORS_ORIGINS),
    async_mode="eventlet",
)
app = socketio.WSGIApp(sio)
service = register_handlers(sio)


if __name__ == '__main__':
    port = settings.PTICE_SOCKETIO_PORT
    logger.info("Socket.IO server naslouchá na portu %s.", port)
    eventlet.wsgi.server(eventlet.listen(('0.0.0.0', port)), app)

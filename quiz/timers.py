"""
Plánování odložených volání pro běžící kvíz.

QuizRunner nepracuje přímo s vlákny ani green thready, dostane plánovač
s metodou ``call_later(delay, callback)``, která vrací objekt s ``cancel()``.
V Socket.IO serveru se používá EventletScheduler, v testech ruční plánovač.
"""
import logging

import eventlet

logger = logging.getLogger(__name__)


class EventletTimer:
    """Odložené volání běžící jako eventlet green thread."""

    def __init__(self, delay, callback):
        self._thread = eventlet.spawn_after(delay, self._run, callback)
        self.cancelled = False

    def _run(self, callback):
        try:
            callback()
        except Exception:
            # Chyba v callbacku nesmí shodit celý server
            logger.exception("Chyba v naplánovaném volání kvízu.")

    def cancel(self):
        if not self.cancelled:
            self.cancelled = True
            self._thread.cancel()


class EventletScheduler:
    """Plánovač pro Socket.IO server běžící v režimu eventlet."""

    def call_later(self, delay, callback):
        return EventletTimer(delay, callback)

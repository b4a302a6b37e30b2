"""
Socket.IO handler pro živý běh kvízu.

Tento modul propojuje Socket.IO server s QuizRunnerem. Každý připojený klient
(záložka prohlížeče) má nejvýše jeden běžící kvíz; odpočet a posun mezi
otázkami řídí server, klient jen zobrazuje, co dostane.

Události od klienta:
- start_quiz {quiz_type, size, official}: vygeneruje otázky a spustí kvíz
- select_answer {option_id}: předběžný výběr možnosti (null = „nevím“)
- skip_question: uzavře otázku s posledním výběrem
- leave_quiz: opuštění kvízu (stejně jako odpojení)

Události od serveru:
- question, tick, answered, finished, quiz_error
"""
import functools
import logging
import threading
from http.cookies import SimpleCookie
from importlib import import_module
from typing import Dict, Optional

from django.conf import settings
from django.contrib.auth import SESSION_KEY, get_user_model

from .catalog import load_catalog, media_locator
from .constants import OFFICIAL_TEST_SIZE, QUIZ_SIZES, QUIZ_TYPES
from .exceptions import CatalogInsufficientError, OfficialTestUnavailableError
from .generator import generate_questions
from .results import record_outcome
from .roles import may_start_official_test, user_is_admin, user_is_authorized
from .scoring import aggregate
from .session import QuizRunner, TimeoutPolicy
from .timers import EventletScheduler

logger = logging.getLogger(__name__)


def user_from_environ(environ):
    """
    Najde přihlášeného Django uživatele podle session cookie v požadavku.

    Returns:
        User objekt, nebo None pokud cookie chybí nebo session neplatí
    """
    cookie = SimpleCookie()
    cookie.load(environ.get("HTTP_COOKIE", ""))
    morsel = cookie.get(settings.SESSION_COOKIE_NAME)
    if morsel is None or not morsel.value:
        return None
    store = import_module(settings.SESSION_ENGINE).SessionStore(session_key=morsel.value)
    user_id = store.get(SESSION_KEY)
    if user_id is None:
        return None
    return get_user_model().objects.filter(pk=user_id, is_active=True).first()


class LiveQuiz:
    """Běžící kvíz jednoho klienta a údaje potřebné k uložení výsledku."""

    def __init__(self, runner, user_email, quiz_type, is_official):
        self.runner = runner
        self.user_email = user_email
        self.quiz_type = quiz_type
        self.is_official = is_official


class LiveQuizService:
    """
    Správa běžících kvízů podle Socket.IO sid.

    Args:
        emit: Funkce ``emit(event, data, to=sid)`` (typicky ``sio.emit``)
        scheduler: Plánovač odložených volání (výchozí EventletScheduler)
        timeout_policy: Bodování vybrané možnosti při vypršení času
    """

    def __init__(self, emit, scheduler=None, timeout_policy=TimeoutPolicy.SCORE_SELECTION):
        self.emit = emit
        self.scheduler = scheduler or EventletScheduler()
        self.timeout_policy = timeout_policy
        self._quizzes: Dict[str, LiveQuiz] = {}
        self._lock = threading.Lock()

    def get(self, sid) -> Optional[LiveQuiz]:
        with self._lock:
            return self._quizzes.get(sid)

    def _error(self, sid, message):
        self.emit("quiz_error", {"message": message}, to=sid)
        return {"status": "error", "message": message}

    def start_quiz(self, sid, user, data):
        """
        Spustí nový kvíz pro klienta.

        Oficiální test má vždy 60 otázek; případný rozběhnutý kvíz
        téhož klienta se nejdřív opustí.
        """
        data = data or {}
        quiz_type = data.get("quiz_type")
        if quiz_type not in QUIZ_TYPES:
            return self._error(sid, "Nepoznat tip kviza.")

        official = bool(data.get("official"))
        if official:
            size = OFFICIAL_TEST_SIZE
        else:
            try:
                size = int(data.get("size", QUIZ_SIZES[0]))
            except (TypeError, ValueError):
                size = 0
            if size not in QUIZ_SIZES:
                return self._error(sid, "Nepoznat broj pitanja.")

        try:
            if official and not may_start_official_test(user, quiz_type):
                raise OfficialTestUnavailableError("Zvanični test nije dostupan.")
            questions = generate_questions(
                load_catalog(), size, quiz_type=quiz_type, official=official, media=media_locator()
            )
        except (CatalogInsufficientError, OfficialTestUnavailableError) as exc:
            logger.warning("Kvíz pro %s nelze spustit: %s", user.email, exc)
            return self._error(sid, str(exc))

        self.leave_quiz(sid)

        runner = QuizRunner(
            questions,
            self.scheduler,
            timeout_policy=self.timeout_policy,
            on_question=functools.partial(self._on_question, sid, len(questions)),
            on_tick=functools.partial(self._on_tick, sid),
            on_answered=functools.partial(self._on_answered, sid),
            on_finish=functools.partial(self._on_finish, sid),
        )
        with self._lock:
            self._quizzes[sid] = LiveQuiz(runner, user.email, quiz_type, official)
        logger.info("Kvíz spuštěn: %s, %s otázek (%s, oficiální=%s).", user.email, len(questions), quiz_type, official)
        runner.start()
        return {"status": "started", "question_count": len(questions)}

    def select_answer(self, sid, data):
        live = self.get(sid)
        if live is None:
            return {"status": "error", "message": "Kviz nije pokrenut."}
        option_id = (data or {}).get("option_id")
        if option_id is not None:
            try:
                option_id = int(option_id)
            except (TypeError, ValueError):
                return {"status": "rejected"}
        accepted = live.runner.select(option_id)
        return {"status": "ok" if accepted else "rejected"}

    def skip_question(self, sid):
        live = self.get(sid)
        if live is None:
            return {"status": "error", "message": "Kviz nije pokrenut."}
        attempt = live.runner.skip()
        return {"status": "ok" if attempt is not None else "rejected"}

    def leave_quiz(self, sid):
        """Opuštění kvízu; zruší jeho časovače, výsledek se neukládá."""
        with self._lock:
            live = self._quizzes.pop(sid, None)
        if live is None:
            return False
        return live.runner.abandon()

    # ----- posluchači QuizRunneru -----

    def _on_question(self, sid, total, index, question, countdown):
        payload = question.to_payload()
        payload.update({"index": index, "total": total, "countdown": countdown})
        self.emit("question", payload, to=sid)

    def _on_tick(self, sid, index, countdown):
        self.emit("tick", {"index": index, "countdown": countdown}, to=sid)

    def _on_answered(self, sid, index, attempt):
        live = self.get(sid)
        self.emit("answered", {
            "index": index,
            "correct_id": attempt.question.correct.id,
            "correct_answer": attempt.correct_answer,
            "selected_id": attempt.selected.id if attempt.selected is not None else None,
            "user_answer": attempt.user_answer,
            "is_correct": attempt.is_correct,
            "points": attempt.points,
            "timed_out": attempt.timed_out,
            "score": live.runner.total_points if live else attempt.points,
        }, to=sid)

    def _on_finish(self, sid, attempts):
        with self._lock:
            live = self._quizzes.pop(sid, None)
        if live is None:
            return
        outcome = aggregate(
            attempts,
            user_email=live.user_email,
            quiz_type=live.quiz_type,
            is_official=live.is_official,
        )
        result = record_outcome(outcome)
        payload = outcome.to_payload()
        payload["saved"] = result is not None
        payload["result_id"] = result.pk if result is not None else None
        self.emit("finished", payload, to=sid)


def register_handlers(sio, service=None):
    """
    Zaregistruje Socket.IO události kvízu na serveru ``sio``.

    Returns:
        LiveQuizService, který události obsluhuje
    """
    service = service or LiveQuizService(emit=sio.emit)

    @sio.event
    def connect(sid, environ):
        """Připojení klienta - jen přihlášený a povolený uživatel."""
        user = user_from_environ(environ)
        if user is None or not user_is_authorized(user):
            logger.warning("Odmítnuto připojení bez oprávnění (sid=%s).", sid)
            return False
        sio.save_session(sid, {"user_id": user.pk, "is_admin": user_is_admin(user)})
        return True

    @sio.event
    def disconnect(sid, *args):
        """Odpojení klienta ukončí jeho rozběhnutý kvíz."""
        service.leave_quiz(sid)

    def _session_user(sid):
        user_id = sio.get_session(sid).get("user_id")
        return get_user_model().objects.filter(pk=user_id, is_active=True).first()

    @sio.event
    def start_quiz(sid, data):
        user = _session_user(sid)
        if user is None:
            return {"status": "error", "message": "Korisnik nije prijavljen."}
        return service.start_quiz(sid, user, data)

    @sio.event
    def select_answer(sid, data):
        return service.select_answer(sid, data)

    @sio.event
    def skip_question(sid, data=None):
        return service.skip_question(sid)

    @sio.event
    def leave_quiz(sid, data=None):
        return {"status": "ok" if service.leave_quiz(sid) else "idle"}

    return service

"""
Stavový automat jednoho běžícího kvízu.

Stavy:
 - READY: kvíz je připravený, ale ještě neběží,
 - AWAITING_ANSWER: běží odpočet a uživatel může (opakovaně) vybírat možnost,
 - ANSWERED: odpověď je uzavřená, zobrazuje se vyhodnocení (2,5 s),
 - FINISHED: všechny otázky jsou zodpovězené, výsledek se předá k uložení,
 - ABANDONED: uživatel kvíz opustil, nic se neukládá.

Každá otázka se uzavře právě jednou - vypršením času, nebo přeskočením.
Uzavření je jednorázová „západka“ pro index otázky, takže souběh přeskočení
a vypršení času nevytvoří dvě odpovědi. Každý naplánovaný callback nese index
otázky, pro kterou vznikl, a pro jinou otázku nic neudělá.
"""
import enum
import functools
import logging
import threading
from typing import Callable, List, Optional, Sequence

from .constants import QUESTION_TIME_SECONDS, SETTLE_DELAY_SECONDS, TICK_SECONDS
from .domain import Attempt, Question, SpeciesRecord
from .scoring import points_for

logger = logging.getLogger(__name__)


class QuizState(enum.Enum):
    READY = "ready"
    AWAITING_ANSWER = "awaiting_answer"
    ANSWERED = "answered"
    FINISHED = "finished"
    ABANDONED = "abandoned"


TERMINAL_STATES = (QuizState.FINISHED, QuizState.ABANDONED)


class TimeoutPolicy(enum.Enum):
    """
    Co se stane s vybranou možností, když vyprší čas.

    SCORE_SELECTION: vybraná možnost se hodnotí běžně (+1 / -1, bez výběru 0).
    LOCK_WITHOUT_POINTS: vybraná možnost se zamkne, ale vždy za 0 bodů,
    protože ji uživatel sám neodeslal.
    """

    SCORE_SELECTION = "score_selection"
    LOCK_WITHOUT_POINTS = "lock_without_points"


class QuizRunner:
    """
    Řídí průchod otázkami kvízu, odpočet a bodování.

    Posluchači (všechny volitelné):
     - on_question(index, question, countdown)
     - on_tick(index, countdown)
     - on_answered(index, attempt)
     - on_finish(attempts) - zavolá se právě jednou, po poslední otázce

    Chyba v posluchači se zaloguje a kvíz pokračuje.
    """

    def __init__(
        self,
        questions: Sequence[Question],
        scheduler,
        timeout_policy: TimeoutPolicy = TimeoutPolicy.SCORE_SELECTION,
        question_seconds: int = QUESTION_TIME_SECONDS,
        settle_seconds: float = SETTLE_DELAY_SECONDS,
        on_question: Optional[Callable] = None,
        on_tick: Optional[Callable] = None,
        on_answered: Optional[Callable] = None,
        on_finish: Optional[Callable] = None,
    ):
        if not questions:
            raise ValueError("Kvíz musí mít alespoň jednu otázku.")
        self.questions = tuple(questions)
        self.scheduler = scheduler
        self.timeout_policy = timeout_policy
        self.question_seconds = question_seconds
        self.settle_seconds = settle_seconds

        self.on_question = on_question
        self.on_tick = on_tick
        self.on_answered = on_answered
        self.on_finish = on_finish

        self._lock = threading.Lock()
        self._state = QuizState.READY
        self._index = 0
        self._countdown = question_seconds
        self._selection: Optional[SpeciesRecord] = None
        self._attempts: List[Attempt] = []
        self._last_finalized = -1
        self._finished = False

        # Jediní vlastníci naplánovaných volání; při každém odchodu z otázky se ruší
        self._countdown_timer = None
        self._settle_timer = None

    # ----- stav -----

    @property
    def state(self) -> QuizState:
        return self._state

    @property
    def index(self) -> int:
        return self._index

    @property
    def countdown(self) -> int:
        return self._countdown

    @property
    def selection(self) -> Optional[SpeciesRecord]:
        return self._selection

    @property
    def attempts(self) -> tuple:
        return tuple(self._attempts)

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> Optional[Question]:
        if self._state in TERMINAL_STATES:
            return None
        return self.questions[self._index]

    @property
    def total_points(self) -> int:
        return sum(attempt.points for attempt in self._attempts)

    @property
    def is_closed(self) -> bool:
        return self._state in TERMINAL_STATES

    # ----- vstupy -----

    def start(self):
        """Spustí první otázku a její odpočet."""
        with self._lock:
            if self._state is not QuizState.READY:
                raise RuntimeError("Kvíz už byl spuštěn.")
            self._state = QuizState.AWAITING_ANSWER
            self._index = 0
            self._countdown = self.question_seconds
        self._begin_question(0)

    def select(self, option_id: Optional[int]) -> bool:
        """
        Předběžný výběr možnosti; lze měnit, dokud otázka běží.

        ``None`` znamená volbu „nevím“. Vrací False, pokud výběr nebyl přijat.
        """
        with self._lock:
            if self._state is not QuizState.AWAITING_ANSWER:
                return False
            if option_id is None:
                self._selection = None
                return True
            option = self.questions[self._index].option_by_id(option_id)
            if option is None:
                logger.warning("Možnost %s nepatří k otázce %s.", option_id, self._index)
                return False
            self._selection = option
            return True

    def skip(self) -> Optional[Attempt]:
        """Uzavře aktuální otázku s posledním výběrem (běžné bodování)."""
        return self._finalize(self._index, timed_out=False)

    def abandon(self) -> bool:
        """Opuštění kvízu: zruší časovače, výsledek se neuloží."""
        with self._lock:
            if self._state in TERMINAL_STATES:
                return False
            self._state = QuizState.ABANDONED
        self._cancel_timers()
        logger.info("Kvíz opuštěn u otázky %s z %s.", self._index + 1, self.question_count)
        return True

    # ----- interní přechody -----

    def _notify(self, listener, *args):
        if listener is None:
            return
        try:
            listener(*args)
        except Exception:
            logger.exception("Chyba v posluchači kvízu.")

    def _begin_question(self, index):
        self._notify(self.on_question, index, self.questions[index], self._countdown)
        self._schedule_tick(index)

    def _schedule_tick(self, index):
        self._countdown_timer = self.scheduler.call_later(
            TICK_SECONDS, functools.partial(self._tick, index)
        )

    def _tick(self, index):
        with self._lock:
            if self._state is not QuizState.AWAITING_ANSWER or index != self._index:
                return
            self._countdown = max(0, self._countdown - 1)
            remaining = self._countdown
        self._notify(self.on_tick, index, remaining)
        if remaining == 0:
            self._finalize(index, timed_out=True)
            return
        # Posluchač mohl mezitím otázku uzavřít
        with self._lock:
            if self._state is not QuizState.AWAITING_ANSWER or index != self._index:
                return
            self._schedule_tick(index)

    def _finalize(self, index, timed_out) -> Optional[Attempt]:
        with self._lock:
            if (
                self._state is not QuizState.AWAITING_ANSWER
                or index != self._index
                or index <= self._last_finalized
            ):
                return None
            self._last_finalized = index
            self._state = QuizState.ANSWERED
            selected = self._selection
            countdown_timer, self._countdown_timer = self._countdown_timer, None

        self._cancel(countdown_timer)

        question = self.questions[index]
        is_correct = selected is not None and selected.id == question.correct.id
        if timed_out and self.timeout_policy is TimeoutPolicy.LOCK_WITHOUT_POINTS:
            points = 0
        else:
            points = points_for(selected, question.correct)

        attempt = Attempt(
            question=question,
            selected=selected,
            is_correct=is_correct,
            points=points,
            timed_out=timed_out,
        )
        self._attempts.append(attempt)
        self._notify(self.on_answered, index, attempt)

        self._settle_timer = self.scheduler.call_later(
            self.settle_seconds, functools.partial(self._advance, index)
        )
        return attempt

    def _advance(self, index):
        with self._lock:
            if self._state is not QuizState.ANSWERED or index != self._index:
                return
            self._settle_timer = None
            if index + 1 >= len(self.questions):
                last = True
            else:
                last = False
                self._index = index + 1
                self._countdown = self.question_seconds
                self._selection = None
                self._state = QuizState.AWAITING_ANSWER
        if last:
            self._finish()
        else:
            self._begin_question(index + 1)

    def _finish(self):
        with self._lock:
            if self._finished:
                return
            self._finished = True
            self._state = QuizState.FINISHED
        self._cancel_timers()
        self._notify(self.on_finish, list(self._attempts))

    def _cancel(self, timer):
        if timer is not None:
            timer.cancel()

    def _cancel_timers(self):
        self._cancel(self._countdown_timer)
        self._cancel(self._settle_timer)
        self._countdown_timer = None
        self._settle_timer = None

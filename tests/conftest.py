import heapq
import itertools
import random

import pytest

from quiz.domain import Question, SpeciesRecord
from quiz.media import MediaLocator


class ManualHandle:
    def __init__(self, due, callback):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Plánovač s ručně posouvaným časem; callbacky běží v ``advance``."""

    def __init__(self):
        self.now = 0.0
        self._queue = []
        self._counter = itertools.count()

    def call_later(self, delay, callback):
        handle = ManualHandle(self.now + delay, callback)
        heapq.heappush(self._queue, (handle.due, next(self._counter), handle))
        return handle

    @property
    def pending(self):
        return [h for _, _, h in self._queue if not h.cancelled]

    def advance(self, seconds):
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            self.now = due
            if not handle.cancelled:
                handle.callback()
        self.now = target


def make_species(count, groups=None, with_images=True):
    """``count`` ptáků rozdělených do skupin (výchozí: po dvou ve skupině)."""
    birds = []
    for i in range(1, count + 1):
        group = groups[i - 1] if groups else (i + 1) // 2
        images = (f"BO_Bird_{i}_1", f"Bird_{i}_2") if with_images else ()
        birds.append(SpeciesRecord(
            id=i,
            name_local=f"Ptica {i}",
            name_latin=f"Avis species{i}",
            group=group,
            media_practice=images,
            media_test=(f"JNA_Bird_{i}_test",) if with_images else (),
        ))
    return birds


def make_question(correct_id=1, option_ids=(1, 2, 3, 4)):
    birds = {b.id: b for b in make_species(max(option_ids))}
    return Question(
        correct=birds[correct_id],
        options=tuple(birds[i] for i in option_ids),
        media_url=f"https://media.example.org/zvuk/Avis%20species{correct_id}.mp3",
    )


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def catalog():
    return make_species(12)


@pytest.fixture
def locator():
    return MediaLocator("https://media.example.org/")


@pytest.fixture
def questions():
    return [make_question(correct_id=i, option_ids=(1, 2, 3, 4)) for i in (1, 2, 3)]

import pytest
from django.contrib.auth.models import User

from quiz.models import AuthorizedUser, OfficialTestSettings, QuizResult, Species
from quiz.session import QuizState, TimeoutPolicy
from quiz.socketio_handler import LiveQuizService, register_handlers, user_from_environ

pytestmark = pytest.mark.django_db

SID = "sid-1"


class FakeEmit:
    def __init__(self):
        self.events = []

    def __call__(self, event, data, to=None):
        self.events.append((event, data, to))

    def of(self, name):
        return [data for event, data, _ in self.events if event == name]


class FakeServer:
    """Náhrada socketio.Server: jen sbírá obsluhy událostí a session."""

    def __init__(self):
        self.handlers = {}
        self.sessions = {}
        self.emit = FakeEmit()

    def event(self, handler):
        self.handlers[handler.__name__] = handler
        return handler

    def save_session(self, sid, session):
        self.sessions[sid] = session

    def get_session(self, sid):
        return self.sessions[sid]


@pytest.fixture
def user():
    user = User.objects.create_user("pera", email="pera@example.org", password="x")
    AuthorizedUser.objects.create(email="pera@example.org")
    return user


@pytest.fixture
def catalog():
    for i in range(1, 13):
        Species.objects.create(
            name_local=f"Ptica {i}", name_latin=f"Avis species{i}", group=(i + 1) // 2,
            media_practice=[f"BO_Avis_{i}"],
        )


@pytest.fixture
def emit():
    return FakeEmit()


@pytest.fixture
def service(emit, scheduler):
    return LiveQuizService(emit, scheduler=scheduler)


def start(service, user, **data):
    payload = {"quiz_type": "slike", "size": 10}
    payload.update(data)
    return service.start_quiz(SID, user, payload)


def test_start_quiz_emits_first_question(service, emit, user, catalog):
    ack = start(service, user)

    assert ack == {"status": "started", "question_count": 10}
    question = emit.of("question")[0]
    assert question["index"] == 0
    assert question["total"] == 10
    assert question["countdown"] == 30
    assert len(question["options"]) == 5
    assert question["author"] == "Boris Okanović"
    assert all(to == SID for _, _, to in emit.events)


def test_start_quiz_with_small_catalog(service, emit, user):
    for i in range(3):
        Species.objects.create(name_local=f"P{i}", name_latin=f"A {i}")

    ack = start(service, user)

    assert ack["status"] == "error"
    assert "potrebno je bar 4" in emit.of("quiz_error")[0]["message"]
    assert service.get(SID) is None


def test_start_quiz_validates_input(service, user, catalog):
    assert start(service, user, quiz_type="video")["status"] == "error"
    assert start(service, user, size="abc")["status"] == "error"
    assert start(service, user, size=11)["status"] == "error"


def test_official_test_forces_sixty_questions(service, user, catalog):
    assert start(service, user, official=True)["status"] == "error"

    OfficialTestSettings.objects.create(active=True)
    ack = start(service, user, official=True, size=10)

    # Katalog má jen 12 ptáků
    assert ack == {"status": "started", "question_count": 12}
    assert service.get(SID).is_official is True


def test_answer_flow_and_result_is_saved(service, emit, scheduler, user, catalog):
    start(service, user, size=10)
    live = service.get(SID)

    for _ in range(10):
        correct_id = live.runner.current_question.correct.id
        assert service.select_answer(SID, {"option_id": str(correct_id)}) == {"status": "ok"}
        assert service.skip_question(SID) == {"status": "ok"}
        scheduler.advance(2.5)

    answered = emit.of("answered")
    assert len(answered) == 10
    assert answered[-1]["score"] == 10
    assert all(a["is_correct"] for a in answered)

    finished = emit.of("finished")
    assert len(finished) == 1
    assert finished[0]["total_points"] == 10
    assert finished[0]["success_rate"] == 100
    assert finished[0]["saved"] is True

    result = QuizResult.objects.get()
    assert result.id == finished[0]["result_id"]
    assert result.user_email == "pera@example.org"
    assert result.quiz_type == "slike"
    assert service.get(SID) is None


def test_timeout_emits_ticks_and_unanswered(service, emit, scheduler, user, catalog):
    start(service, user)
    scheduler.advance(30)

    assert emit.of("tick")[-1]["countdown"] == 0
    answered = emit.of("answered")[0]
    assert answered["timed_out"] is True
    assert answered["user_answer"] is None
    assert answered["points"] == 0


def test_invalid_selection_is_rejected(service, user, catalog):
    start(service, user)

    assert service.select_answer(SID, {"option_id": "abc"}) == {"status": "rejected"}
    assert service.select_answer(SID, {"option_id": 9999}) == {"status": "rejected"}
    assert service.select_answer(SID, {"option_id": None}) == {"status": "ok"}
    assert service.select_answer("other", {"option_id": 1})["status"] == "error"


def test_leave_quiz_discards_result(service, emit, scheduler, user, catalog):
    start(service, user)
    live = service.get(SID)

    assert service.leave_quiz(SID) is True
    scheduler.advance(400)

    assert live.runner.state is QuizState.ABANDONED
    assert emit.of("finished") == []
    assert QuizResult.objects.count() == 0
    assert service.leave_quiz(SID) is False


def test_restart_abandons_previous_quiz(service, user, catalog):
    start(service, user)
    first = service.get(SID)

    start(service, user)

    assert first.runner.state is QuizState.ABANDONED
    assert service.get(SID) is not first


def test_lock_policy_is_passed_to_runner(emit, scheduler, user, catalog):
    service = LiveQuizService(emit, scheduler=scheduler, timeout_policy=TimeoutPolicy.LOCK_WITHOUT_POINTS)
    start(service, user)

    assert service.get(SID).runner.timeout_policy is TimeoutPolicy.LOCK_WITHOUT_POINTS


def test_user_from_environ(client, user):
    client.force_login(user)
    cookie = client.cookies["sessionid"].value

    assert user_from_environ({"HTTP_COOKIE": f"sessionid={cookie}"}) == user
    assert user_from_environ({"HTTP_COOKIE": "sessionid=neplatna"}) is None
    assert user_from_environ({}) is None


def test_registered_handlers(client, user, catalog, scheduler):
    sio = FakeServer()
    service = register_handlers(sio, LiveQuizService(sio.emit, scheduler=scheduler))
    client.force_login(user)
    environ = {"HTTP_COOKIE": f"sessionid={client.cookies['sessionid'].value}"}

    assert sio.handlers["connect"](SID, environ) is True
    assert sio.sessions[SID] == {"user_id": user.pk, "is_admin": False}
    assert sio.handlers["connect"]("anon", {}) is False

    ack = sio.handlers["start_quiz"](SID, {"quiz_type": "oglasavanje", "size": 10})
    assert ack["status"] == "started"
    assert sio.emit.of("question")[0]["media_url"].startswith("https://media.example.org/zvuk/")

    sio.handlers["disconnect"](SID)
    assert service.get(SID) is None

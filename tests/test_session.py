import pytest

from quiz.session import QuizRunner, QuizState, TimeoutPolicy


class Recorder:
    def __init__(self):
        self.questions = []
        self.ticks = []
        self.answered = []
        self.finished = []

    def listeners(self):
        return {
            "on_question": lambda index, question, countdown: self.questions.append((index, countdown)),
            "on_tick": lambda index, countdown: self.ticks.append((index, countdown)),
            "on_answered": lambda index, attempt: self.answered.append((index, attempt)),
            "on_finish": lambda attempts: self.finished.append(attempts),
        }


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def runner(questions, scheduler, recorder):
    return QuizRunner(questions, scheduler, **recorder.listeners())


def test_start_shows_first_question(runner, recorder):
    runner.start()

    assert runner.state is QuizState.AWAITING_ANSWER
    assert recorder.questions == [(0, 30)]
    assert runner.countdown == 30


def test_start_twice_raises(runner):
    runner.start()

    with pytest.raises(RuntimeError):
        runner.start()


def test_empty_questions_rejected(scheduler):
    with pytest.raises(ValueError):
        QuizRunner([], scheduler)


def test_countdown_ticks_every_second(runner, scheduler, recorder):
    runner.start()
    scheduler.advance(3)

    assert recorder.ticks == [(0, 29), (0, 28), (0, 27)]
    assert runner.countdown == 27


def test_correct_answer_scores_one(runner, scheduler):
    runner.start()
    assert runner.select(1)

    attempt = runner.skip()

    assert attempt.is_correct
    assert attempt.points == 1
    assert attempt.user_answer == "Ptica 1"
    assert runner.state is QuizState.ANSWERED


def test_wrong_skip_scores_minus_one(runner):
    runner.start()
    runner.select(3)

    attempt = runner.skip()

    assert not attempt.is_correct
    assert attempt.points == -1
    assert attempt.user_answer == "Ptica 3"
    assert attempt.correct_answer == "Ptica 1"


def test_dont_know_scores_zero(runner):
    runner.start()
    runner.select(2)
    runner.select(None)

    attempt = runner.skip()

    assert attempt.selected is None
    assert attempt.points == 0


def test_selection_can_change_until_closed(runner):
    runner.start()
    runner.select(3)
    runner.select(1)

    assert runner.skip().points == 1


def test_unknown_option_is_rejected(runner):
    runner.start()

    assert runner.select(42) is False
    assert runner.selection is None


def test_timeout_without_selection(runner, scheduler, recorder):
    runner.start()
    scheduler.advance(30)

    index, attempt = recorder.answered[0]
    assert index == 0
    assert attempt.timed_out
    assert attempt.user_answer is None
    assert attempt.points == 0
    assert recorder.ticks[-1] == (0, 0)


def test_timeout_scores_pending_selection(runner, scheduler):
    runner.start()
    runner.select(1)
    scheduler.advance(30)

    assert runner.attempts[0].points == 1


def test_timeout_lock_without_points(questions, scheduler):
    runner = QuizRunner(questions, scheduler, timeout_policy=TimeoutPolicy.LOCK_WITHOUT_POINTS)
    runner.start()
    runner.select(1)
    scheduler.advance(30)

    attempt = runner.attempts[0]
    assert attempt.is_correct
    assert attempt.user_answer == "Ptica 1"
    assert attempt.points == 0


def test_lock_policy_keeps_points_on_skip(questions, scheduler):
    runner = QuizRunner(questions, scheduler, timeout_policy=TimeoutPolicy.LOCK_WITHOUT_POINTS)
    runner.start()
    runner.select(2)

    assert runner.skip().points == -1


def test_selection_ignored_after_close(runner):
    runner.start()
    runner.skip()

    assert runner.select(1) is False


def test_double_finalization_produces_one_attempt(runner, scheduler, recorder):
    runner.start()
    scheduler.advance(29)
    runner.skip()
    # Tick, který by otázku uzavřel vypršením času, už nic neudělá
    scheduler.advance(1)
    assert runner.skip() is None

    assert len(runner.attempts) == 1
    assert len(recorder.answered) == 1
    assert runner.attempts[0].timed_out is False


def test_skip_during_tick_listener_leaves_no_countdown(questions, scheduler):
    runner = None
    answered = []

    def on_tick(index, countdown):
        if countdown == 29:
            runner.skip()

    runner = QuizRunner(
        questions, scheduler, on_tick=on_tick,
        on_answered=lambda index, attempt: answered.append(attempt),
    )
    runner.start()
    scheduler.advance(1)

    assert runner.state is QuizState.ANSWERED
    assert len(answered) == 1
    assert [h.callback.func.__name__ for h in scheduler.pending] == ["_advance"]

    scheduler.advance(1)
    assert runner.countdown == 29
    assert len(answered) == 1


def test_skip_cancels_countdown(runner, scheduler, recorder):
    runner.start()
    runner.skip()
    scheduler.advance(2)

    assert recorder.ticks == []


def test_settle_delay_before_next_question(runner, scheduler, recorder):
    runner.start()
    runner.skip()

    scheduler.advance(2)
    assert runner.index == 0
    assert runner.state is QuizState.ANSWERED

    scheduler.advance(0.5)
    assert runner.index == 1
    assert runner.state is QuizState.AWAITING_ANSWER
    assert runner.selection is None
    assert recorder.questions[-1] == (1, 30)


def test_selection_resets_between_questions(runner, scheduler):
    runner.start()
    runner.select(1)
    runner.skip()
    scheduler.advance(2.5)
    scheduler.advance(30)

    assert runner.attempts[1].selected is None


def test_stale_tick_from_previous_question_is_ignored(runner, scheduler):
    runner.start()
    runner._tick(5)

    assert runner.countdown == 30


def test_finish_is_called_exactly_once(runner, scheduler, recorder):
    runner.start()
    for option in (1, 3, None):
        runner.select(option)
        runner.skip()
        scheduler.advance(2.5)

    runner._finish()
    scheduler.advance(60)

    assert runner.state is QuizState.FINISHED
    assert len(recorder.finished) == 1
    assert [a.points for a in recorder.finished[0]] == [1, -1, 0]
    assert runner.total_points == 0
    assert scheduler.pending == []


def test_full_run_by_timeouts(runner, scheduler, recorder):
    runner.start()
    scheduler.advance(3 * 32.5)

    assert runner.state is QuizState.FINISHED
    assert len(recorder.finished[0]) == 3
    assert all(a.timed_out for a in recorder.finished[0])


def test_abandon_cancels_timers_and_never_finishes(runner, scheduler, recorder):
    runner.start()
    runner.select(1)

    assert runner.abandon() is True
    scheduler.advance(120)

    assert runner.state is QuizState.ABANDONED
    assert recorder.finished == []
    assert recorder.answered == []
    assert runner.is_closed
    assert runner.abandon() is False
    assert runner.current_question is None


def test_abandon_during_settle(runner, scheduler, recorder):
    runner.start()
    runner.skip()
    runner.abandon()
    scheduler.advance(3)

    assert recorder.questions == [(0, 30)]
    assert scheduler.pending == []


def test_listener_errors_do_not_stop_quiz(questions, scheduler, caplog):
    def broken(*args):
        raise RuntimeError("boom")

    runner = QuizRunner(questions, scheduler, on_question=broken, on_answered=broken)
    runner.start()
    runner.skip()
    scheduler.advance(2.5)

    assert runner.index == 1
    assert "Chyba v posluchači kvízu." in caplog.text

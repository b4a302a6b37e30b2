from datetime import timedelta

import pytest
from django.utils import timezone

from quiz.models import AuthorizedUser, OfficialTestSettings, QuizResult, Species

pytestmark = pytest.mark.django_db


def test_species_to_record():
    species = Species.objects.create(
        name_local="Velika senica",
        name_latin="Parus major",
        group=3,
        media_practice=["BO_Parus_major_1"],
        media_test=["Parus_major_t"],
    )

    record = species.to_record()

    assert record.id == species.id
    assert record.group == 3
    assert record.media_pool(official=False) == ("BO_Parus_major_1",)
    assert record.media_pool(official=True) == ("Parus_major_t",)
    assert species.thumbnail_key == "BO_Parus_major_1"
    assert species.image_count == 2


def test_species_thumbnail_falls_back_to_test_pool():
    species = Species(name_local="Kos", name_latin="Turdus merula", media_test=["Turdus_1"])

    assert species.thumbnail_key == "Turdus_1"
    assert Species(name_local="Sova", name_latin="Strix aluco").thumbnail_key is None


def test_authorized_user_email_is_normalized():
    user = AuthorizedUser.objects.create(email="  Pera.Peric@Gmail.com ")

    assert user.email == "pera.peric@gmail.com"
    assert user.is_admin is False


def test_official_settings_is_singleton():
    OfficialTestSettings(active=True).save()
    OfficialTestSettings(active=False).save()

    assert OfficialTestSettings.objects.count() == 1
    assert OfficialTestSettings.load().active is False


def test_official_window():
    now = timezone.now()
    settings_row = OfficialTestSettings.load()

    assert settings_row.is_available(now) is False

    settings_row.start = now - timedelta(hours=1)
    assert settings_row.is_available(now) is True

    settings_row.end = now - timedelta(minutes=1)
    assert settings_row.is_available(now) is False

    settings_row.start = None
    settings_row.end = now + timedelta(days=1)
    assert settings_row.is_available(now) is True

    settings_row.start = now + timedelta(hours=1)
    assert settings_row.is_available(now) is False

    settings_row.active = True
    assert settings_row.is_available(now) is True


def test_has_official_attempt_per_quiz_type():
    QuizResult.objects.create(
        user_email="pera@example.org", question_count=60, total_points=30,
        is_official=True, quiz_type="slike",
    )
    QuizResult.objects.create(
        user_email="pera@example.org", question_count=10, total_points=3,
        is_official=False, quiz_type="oglasavanje",
    )

    assert QuizResult.objects.has_official_attempt("PERA@example.org", "slike") is True
    assert QuizResult.objects.has_official_attempt("pera@example.org", "oglasavanje") is False
    assert QuizResult.objects.has_official_attempt("mika@example.org", "slike") is False


def test_results_are_newest_first():
    older = QuizResult.objects.create(
        user_email="pera@example.org", question_count=10, total_points=1,
        created_at=timezone.now() - timedelta(days=1),
    )
    newer = QuizResult.objects.create(user_email="pera@example.org", question_count=10, total_points=-2)

    assert list(QuizResult.objects.for_user("pera@example.org")) == [newer, older]
    assert newer.success_rate == 0
    assert older.success_rate == 10

import logging

import pytest

from conftest import make_species
from quiz.constants import QUIZ_TYPE_AUDIO, QUIZ_TYPE_IMAGE
from quiz.domain import SpeciesRecord
from quiz.exceptions import CatalogInsufficientError
from quiz.generator import generate_questions
from quiz.media import author_for


def assert_valid(questions, option_count):
    for question in questions:
        ids = [o.id for o in question.options]
        names = [o.name_local for o in question.options]
        assert ids.count(question.correct.id) == 1
        assert len(set(ids)) == len(ids)
        assert len(set(names)) == len(names)
        assert len(question.options) == option_count


@pytest.mark.parametrize("quiz_type,option_count", [(QUIZ_TYPE_AUDIO, 4), (QUIZ_TYPE_IMAGE, 5)])
def test_options_are_unique_and_contain_correct(catalog, rng, locator, quiz_type, option_count):
    questions = generate_questions(catalog, 10, quiz_type=quiz_type, media=locator, rng=rng)

    assert len(questions) == 10
    assert_valid(questions, option_count)


def test_question_species_are_distinct(catalog, rng):
    questions = generate_questions(catalog, 10, rng=rng)

    assert len({q.correct.id for q in questions}) == 10


def test_size_is_bounded_by_distinct_species(rng):
    catalog = make_species(4)

    questions = generate_questions(catalog, 10, rng=rng)

    assert len(questions) == 4
    for question in questions:
        assert {o.id for o in question.options} == {1, 2, 3, 4}


def test_duplicate_ids_count_once(rng):
    catalog = make_species(4)

    questions = generate_questions(catalog + catalog, 10, rng=rng)

    assert len(questions) == 4


def test_every_group_is_represented(rng):
    # 6 skupin po dvou ptácích, 6 otázek: každá skupina právě jednou
    catalog = make_species(12)

    questions = generate_questions(catalog, 6, rng=rng)

    assert sorted(q.correct.group for q in questions) == [1, 2, 3, 4, 5, 6]


def test_same_group_distractors_preferred(rng):
    groups = [1, 1, 1, 2, 2, 3, 3, 4, 4, 5]
    catalog = make_species(10, groups=groups)

    for question in generate_questions(catalog, 10, quiz_type=QUIZ_TYPE_IMAGE, rng=rng):
        same = [o for o in question.options if o.group == question.correct.group and o.id != question.correct.id]
        available = groups.count(question.correct.group) - 1
        assert len(same) >= min(2, available)


def test_small_catalog_without_other_groups(rng):
    catalog = make_species(4, groups=[1, 1, 1, 1])

    questions = generate_questions(catalog, 4, quiz_type=QUIZ_TYPE_IMAGE, rng=rng)

    # Pět možností ze čtyř ptáků sestavit nelze
    assert all(len(q.options) == 4 for q in questions)


def test_duplicate_display_names_never_share_a_question(rng):
    catalog = make_species(6)
    catalog.append(SpeciesRecord(id=99, name_local="Ptica 1", name_latin="Avis duplicata", group=1))

    for question in generate_questions(catalog, 7, rng=rng):
        names = [o.name_local for o in question.options]
        assert len(set(names)) == len(names)


def test_insufficient_catalog_raises():
    with pytest.raises(CatalogInsufficientError) as excinfo:
        generate_questions(make_species(3), 10)

    assert excinfo.value.available == 3
    assert "potrebno je bar 4" in str(excinfo.value)


def test_unknown_quiz_type_raises(catalog):
    with pytest.raises(ValueError):
        generate_questions(catalog, 10, quiz_type="video")


def test_audio_url_is_derived_from_latin_name(catalog, rng, locator):
    question = generate_questions(catalog, 1, quiz_type=QUIZ_TYPE_AUDIO, media=locator, rng=rng)[0]

    expected = f"https://media.example.org/zvuk/{question.correct.name_latin.replace(' ', '%20')}.mp3"
    assert question.media_url == expected
    assert question.author is None


def test_image_comes_from_practice_pool(catalog, rng, locator):
    for question in generate_questions(catalog, 10, quiz_type=QUIZ_TYPE_IMAGE, media=locator, rng=rng):
        assert question.media_key in question.correct.media_practice
        assert question.media_url == f"https://media.example.org/slike/{question.media_key}.jpg"


def test_official_image_comes_from_test_pool(catalog, rng, locator):
    for question in generate_questions(catalog, 10, quiz_type=QUIZ_TYPE_IMAGE, official=True, media=locator, rng=rng):
        assert question.media_key in question.correct.media_test
        assert question.author == "Jelena Nikolić Antonijević"


def test_empty_test_pool_gives_placeholder(rng, locator, caplog):
    catalog = make_species(60, with_images=False)

    with caplog.at_level(logging.WARNING, logger="quiz.generator"):
        questions = generate_questions(catalog, 60, quiz_type=QUIZ_TYPE_IMAGE, official=True, media=locator, rng=rng)

    assert len(questions) == 60
    assert all(q.media_url == "" for q in questions)
    assert all(q.to_payload()["media_available"] is False for q in questions)
    assert "nemá fotografie" in caplog.text


def test_payload_does_not_reveal_correct_answer(catalog, rng):
    payload = generate_questions(catalog, 1, rng=rng)[0].to_payload()

    assert "correct" not in payload
    assert {"id", "name", "latin"} == set(payload["options"][0])


@pytest.mark.parametrize("filename,author", [
    ("BO_Parus_major_1", "Boris Okanović"),
    ("JNA_Parus_major", "Jelena Nikolić Antonijević"),
    ("XY_Parus_major", None),
    ("Parus_major", None),
    ("", None),
])
def test_author_for(filename, author):
    assert author_for(filename) == author

import pytest

from quiz.catalog import format_media_list, parse_media_list
from quiz.exceptions import MediaUnavailableError
from quiz.media import MediaLocator


def test_urls_follow_storage_layout():
    locator = MediaLocator("https://cdn.example.org/public/")

    assert locator.audio_url("Parus major") == "https://cdn.example.org/public/zvuk/Parus%20major.mp3"
    assert locator.image_url("BO_Parus_major_1") == "https://cdn.example.org/public/slike/BO_Parus_major_1.jpg"


def test_empty_key_is_unavailable():
    locator = MediaLocator("")

    with pytest.raises(MediaUnavailableError):
        locator.image_url("")
    with pytest.raises(MediaUnavailableError):
        locator.audio_url("")


def test_parse_media_list():
    assert parse_media_list(" a, b ,,c ") == ["a", "b", "c"]
    assert parse_media_list("a|b, c", separators="|,") == ["a", "b", "c"]
    assert parse_media_list("") == []
    assert parse_media_list(["a ", ""]) == ["a"]
    assert format_media_list(["a", "b"]) == "a, b"

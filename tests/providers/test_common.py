"""Tests for the shared provider helpers."""

import pytest

from nontonplux.core.models import ExtractorLink
from nontonplux.providers.common import PassthroughResolver, TextCleaner, URLHelper

MAIN_URL = "https://site.example"


class TestURLHelper:
    """URL normalisation and substring helpers."""

    @pytest.mark.parametrize("url,expected", [
        ("https://cdn.example/a.jpg", "https://cdn.example/a.jpg"),
        ("http://cdn.example/a.jpg", "http://cdn.example/a.jpg"),
        ("//cdn.example/a.jpg", "https://cdn.example/a.jpg"),
        ("/anime/one-piece/", f"{MAIN_URL}/anime/one-piece/"),
        ("anime/one-piece/", f"{MAIN_URL}/anime/one-piece/"),
        ('{"file": "x"}', '{"file": "x"}'),
        ("", ""),
        (None, ""),
    ])
    def test_fix_url(self, url, expected):
        assert URLHelper.fix_url(url, MAIN_URL) == expected

    def test_fix_url_null(self):
        assert URLHelper.fix_url_null(None, MAIN_URL) is None
        assert URLHelper.fix_url_null("", MAIN_URL) is None
        assert URLHelper.fix_url_null("/x", MAIN_URL) == f"{MAIN_URL}/x"

    def test_substrings(self):
        assert URLHelper.substring_after("a?id=1&token=2", "id=") == "1&token=2"
        assert URLHelper.substring_after("abc", "z") == "abc"
        assert URLHelper.substring_before("1&token=2", "&token") == "1"
        assert URLHelper.substring_before("abc", "z") == "abc"
        assert URLHelper.substring_before_last("https://h/embed/x/player", "/") == "https://h/embed/x"

    def test_extract_domain(self):
        assert URLHelper.extract_domain("https://streamtape.example/e/1") == "streamtape.example"


class TestTextCleaner:
    """Text extraction helpers."""

    def test_extract_episode_number(self):
        assert TextCleaner.extract_episode_number("One Piece Episode 12 Subtitle Indonesia") == 12
        assert TextCleaner.extract_episode_number("Bleach Episode12") == 12
        assert TextCleaner.extract_episode_number("Jujutsu Kaisen 0 Movie") is None
        assert TextCleaner.extract_episode_number(None) is None

    def test_extract_quality(self):
        assert TextCleaner.extract_quality("https://cdn.example/op.1080.mp4") == 1080
        assert TextCleaner.extract_quality("https://cdn.example/op.720.mp4") == 720
        assert TextCleaner.extract_quality("https://cdn.example/op.mp4") is None

    def test_parse_int(self):
        assert TextCleaner.parse_int(" 1999 ") == 1999
        assert TextCleaner.parse_int("Dec 24, 2021") is None
        assert TextCleaner.parse_int(None) is None

    def test_digits_only(self):
        assert TextCleaner.digits_only("Episode 12") == 12
        assert TextCleaner.digits_only("no digits") is None

    def test_parse_rating(self):
        assert TextCleaner.parse_rating("8.4/10 dari 500 pengguna") == 8.4
        assert TextCleaner.parse_rating("7,2") == 7.2
        assert TextCleaner.parse_rating("N/A") is None

    def test_decode_base64(self):
        assert TextCleaner.decode_base64("PGlmcmFtZT4=") == "<iframe>"
        assert TextCleaner.decode_base64("PGlmcmFtZT4") == "<iframe>"


class TestPassthroughResolver:
    """Fallback resolver used when no extractor is injected."""

    @pytest.mark.asyncio
    async def test_emits_embed_url(self):
        links = []

        handled = await PassthroughResolver().resolve(
            "https://streamtape.example/e/1", "https://site.example", lambda s: None, links.append
        )

        assert handled is True
        assert links == [ExtractorLink(
            source="streamtape.example",
            name="streamtape.example",
            url="https://streamtape.example/e/1",
            referer="https://site.example",
        )]

    @pytest.mark.asyncio
    async def test_ignores_empty_url(self):
        links = []

        assert await PassthroughResolver().resolve("", None, lambda s: None, links.append) is False
        assert links == []

"""Tests for the translation pipeline."""

from unittest.mock import AsyncMock
from urllib.parse import parse_qs, urlparse

import pytest

from babelbot.domain.languages import LanguageLookup
from babelbot.domain.models import DisplayPayload, RejectionPayload
from babelbot.domain.translation import (
    MAX_LINK_LENGTH,
    TRANSLATION_FAILED,
    TranslationPipeline,
    build_reference_link,
    derive_markers,
    escape_mentions,
    format_display,
    normalize_text,
    parse_lang_pair,
)
from babelbot.ports.outbound import TranslationResult

LOOKUP = LanguageLookup({"en": "gb", "es": "es", "fr": "fr"})


def _pipeline(result=None, side_effect=None) -> TranslationPipeline:
    translator = AsyncMock()
    translator.translate = AsyncMock(return_value=result, side_effect=side_effect)
    return TranslationPipeline(translator, LOOKUP)


class TestNormalizeText:
    def test_list_joined(self):
        assert normalize_text(["a", "b"]) == "a, b"

    def test_single_element_list(self):
        assert normalize_text(["Hola"]) == "Hola"

    def test_string_passthrough(self):
        assert normalize_text("Hola") == "Hola"

    def test_empty_list(self):
        assert normalize_text([]) == ""

    @pytest.mark.parametrize("value", [None, 42, {"text": "x"}, ["a", 1]])
    def test_wrong_shape(self, value):
        assert normalize_text(value) is None


class TestParseLangPair:
    def test_valid(self):
        assert parse_lang_pair("en-es") == ("en", "es")

    def test_uppercase_lowered(self):
        assert parse_lang_pair("EN-ES") == ("en", "es")

    @pytest.mark.parametrize("value", ["e-es", "en-e", "eng-esp", "en_es", "en-es\n", "", None, 200, ["en", "es"]])
    def test_invalid(self, value):
        assert parse_lang_pair(value) is None


class TestDeriveMarkers:
    def test_detected_pair(self):
        result = TranslationResult(status_code=200, lang_pair="en-es", text="Hola")
        assert derive_markers(result, "es", LOOKUP) == (":flag_gb:", ":flag_es:")

    def test_unmapped_code_falls_back_to_itself(self):
        result = TranslationResult(status_code=200, lang_pair="xx-fr", text="Salut")
        assert derive_markers(result, "fr", LOOKUP) == (":flag_xx:", ":flag_fr:")

    def test_malformed_pair(self):
        result = TranslationResult(status_code=200, lang_pair="e-es", text="Hola")
        assert derive_markers(result, "es", LOOKUP) == ("es", "N/A")

    def test_missing_pair(self):
        result = TranslationResult(status_code=200, text="Hola")
        assert derive_markers(result, "es", LOOKUP) == ("es", "N/A")

    def test_non_200_ignores_pair(self):
        result = TranslationResult(status_code=502, lang_pair="en-es", text="Hola")
        assert derive_markers(result, "es", LOOKUP) == ("es", "N/A")


class TestBuildReferenceLink:
    def _query(self, link):
        return parse_qs(urlparse(link).query)

    def test_detected_source(self):
        q = self._query(build_reference_link("hello world", "fr", "en"))
        assert q["text"] == ["hello world"]
        assert q["lang"] == ["en-fr"]

    def test_guess_for_english_target(self):
        assert self._query(build_reference_link("hola", "en"))["lang"] == ["es-en"]

    def test_guess_for_other_target(self):
        assert self._query(build_reference_link("hello", "ru"))["lang"] == ["en-ru"]

    def test_text_is_escaped(self):
        link = build_reference_link("a&b=c", "fr")
        assert "a%26b%3Dc" in link

    def test_missing_fields(self):
        link = build_reference_link(None, None)
        assert link.startswith("https://translate.yandex.ru/?text=&lang=en-")


class TestTranslationPipeline:
    @pytest.mark.asyncio
    async def test_success(self):
        pipeline = _pipeline(TranslationResult(status_code=200, lang_pair="en-es", text=["Hola"]))
        outcome = await pipeline.translate("C1", "es", "Hello")
        assert isinstance(outcome, DisplayPayload)
        assert outcome.src_marker == ":flag_gb:"
        assert outcome.dst_marker == ":flag_es:"
        assert outcome.original_text == "Hello"
        assert outcome.translated_text == "Hola"
        assert "lang=en-es" in outcome.reference_link

    @pytest.mark.asyncio
    async def test_calls_service_with_text_and_lang(self):
        pipeline = _pipeline(TranslationResult(status_code=200, text="Hola"))
        await pipeline.translate("C1", "es", "Hello")
        pipeline._translator.translate.assert_awaited_once_with("Hello", "es")

    @pytest.mark.asyncio
    async def test_list_text_joined(self):
        pipeline = _pipeline(TranslationResult(status_code=200, text=["a", "b"]))
        outcome = await pipeline.translate("C1", "es", "x")
        assert outcome.translated_text == "a, b"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", [[], "", None, 7, ["ok", None]])
    async def test_unusable_text_rejected(self, text):
        result = TranslationResult(status_code=200, lang_pair="en-es", text=text, raw={"text": text})
        outcome = await _pipeline(result).translate("C1", "es", "Hello")
        assert isinstance(outcome, RejectionPayload)
        assert outcome.error_message == TRANSLATION_FAILED
        assert outcome.channel_id == "C1"
        assert outcome.target_lang == "es"
        assert outcome.source_text == "Hello"
        assert outcome.raw_result == {"text": text}

    @pytest.mark.asyncio
    async def test_text_wins_over_status_code(self):
        pipeline = _pipeline(TranslationResult(status_code=401, lang_pair="en-es", text="Hola"))
        outcome = await pipeline.translate("C1", "es", "Hello")
        assert isinstance(outcome, DisplayPayload)
        assert (outcome.src_marker, outcome.dst_marker) == ("es", "N/A")
        assert "lang=en-es" in outcome.reference_link

    @pytest.mark.asyncio
    async def test_malformed_pair_falls_back(self):
        pipeline = _pipeline(TranslationResult(status_code=200, lang_pair="e-es", text="Hola"))
        outcome = await pipeline.translate("C1", "es", "Hello")
        assert (outcome.src_marker, outcome.dst_marker) == ("es", "N/A")

    @pytest.mark.asyncio
    async def test_service_exception(self):
        pipeline = _pipeline(side_effect=RuntimeError("boom"))
        outcome = await pipeline.translate("C1", "es", "Hello")
        assert isinstance(outcome, RejectionPayload)
        assert outcome.error_message == TRANSLATION_FAILED
        assert outcome.raw_result is None

    @pytest.mark.asyncio
    async def test_timeout_reported_as_failure(self):
        pipeline = _pipeline(TranslationResult(error="Timed out after 10.0s"))
        outcome = await pipeline.translate("C1", "es", "Hello")
        assert isinstance(outcome, RejectionPayload)
        assert outcome.error_message == TRANSLATION_FAILED
        assert outcome.raw_result == "Timed out after 10.0s"

    @pytest.mark.asyncio
    async def test_raw_dict_from_service(self):
        pipeline = _pipeline({"code": 200, "lang": "en-fr", "text": ["Salut"]})
        outcome = await pipeline.translate("C1", "fr", "Hi")
        assert isinstance(outcome, DisplayPayload)
        assert outcome.dst_marker == ":flag_fr:"


class TestFormatDisplay:
    def test_contains_all_parts(self):
        payload = DisplayPayload(":flag_gb:", ":flag_fr:", "hello world", "bonjour le monde", "https://x")
        line = format_display(payload)
        assert line.startswith(":flag_gb:  hello world  ⇒  :flag_fr:  **bonjour le monde**")
        assert "<https://x>" in line

    def test_mentions_in_echoed_text_are_broken(self):
        payload = DisplayPayload(":flag_gb:", ":flag_fr:", "@everyone hi", "<@555> salut @here", "https://x")
        line = format_display(payload)
        assert "@everyone" not in line
        assert "@here" not in line
        assert "<@555>" not in line
        assert "everyone hi" in line


class TestEscapeMentions:
    def test_plain_text_unchanged(self):
        assert escape_mentions("hello world") == "hello world"
        assert escape_mentions("mail me @ noon") == "mail me @ noon"

    def test_mention_forms(self):
        assert escape_mentions("@everyone") == "@\u200beveryone"
        assert escape_mentions("<@!42>") == "<@\u200b!42>"
        assert escape_mentions("<@&7>") == "<@\u200b&7>"


class TestReferenceLinkLength:
    def test_long_non_ascii_text_is_capped(self):
        link = build_reference_link("привет " * 280, "en")
        assert len(link) <= MAX_LINK_LENGTH
        assert link.endswith("&lang=es-en")
        assert parse_qs(urlparse(link).query)["text"][0].startswith("привет привет")

    def test_cut_keeps_escapes_whole(self):
        link = build_reference_link("é" * 2000, "fr")
        text = parse_qs(urlparse(link).query)["text"][0]
        assert set(text) == {"é"}

    def test_short_text_untouched(self):
        assert build_reference_link("hello", "fr", "en") == (
            "https://translate.yandex.ru/?text=hello&lang=en-fr"
        )

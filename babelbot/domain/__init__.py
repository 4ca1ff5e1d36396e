"""Domain layer — pure Python, no framework dependencies."""

from babelbot.domain.agent import ChatAgent
from babelbot.domain.intent import match_intent, parse_translate_request
from babelbot.domain.languages import LanguageLookup, get_language_lookup
from babelbot.domain.models import (
    DisplayPayload,
    Intent,
    RejectionPayload,
    TranslateParse,
    TranslateRequest,
)
from babelbot.domain.report import ErrorReporter, format_rejection
from babelbot.domain.translation import TranslationPipeline, normalize_text

__all__ = [
    "ChatAgent",
    "DisplayPayload",
    "ErrorReporter",
    "Intent",
    "LanguageLookup",
    "RejectionPayload",
    "TranslateParse",
    "TranslateRequest",
    "TranslationPipeline",
    "format_rejection",
    "get_language_lookup",
    "match_intent",
    "normalize_text",
    "parse_translate_request",
]

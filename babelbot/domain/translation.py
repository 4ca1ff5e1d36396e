"""Translation pipeline — request in, display or rejection payload out.

Failures are returned as ``RejectionPayload`` values; nothing here raises
for a bad response. The caller decides how to deliver either outcome.
"""

import re
import sys
from typing import Any, Optional, Tuple, Union
from urllib.parse import quote

from babelbot.domain.languages import LanguageLookup
from babelbot.domain.models import DisplayPayload, RejectionPayload
from babelbot.ports.outbound import TranslationResult, TranslatorPort

INVALID_INPUT = "Invalid input"
TRANSLATION_FAILED = "Translation failed"

NO_LANG_PAIR_MARKER = "N/A"
LANG_PAIR_RE = re.compile(r"\w{2}-\w{2}")

REFERENCE_URL = "https://translate.yandex.ru/"
# Discord rejects embed urls longer than this
MAX_LINK_LENGTH = 2048

_MENTION_RE = re.compile(r"@(?=[\w!&])")


def _log(msg: str):
    print(msg, file=sys.stderr)


def escape_mentions(text: str) -> str:
    """Break @everyone, @here and <@id> mentions so echoed text pings nobody."""
    return _MENTION_RE.sub("@\u200b", text)


def normalize_text(text: Any) -> Optional[str]:
    """Join a list of strings with ", "; pass strings through; else None."""
    if isinstance(text, list):
        if not all(isinstance(t, str) for t in text):
            return None
        return ", ".join(text)
    if isinstance(text, str):
        return text
    return None


def parse_lang_pair(lang_pair: Any) -> Optional[Tuple[str, str]]:
    """Split an exact ``xx-yy`` pair into lowercase codes, else None."""
    if not isinstance(lang_pair, str) or not LANG_PAIR_RE.fullmatch(lang_pair):
        return None
    src, dst = lang_pair.lower().split("-")
    return src, dst


def flag_marker(country: str) -> str:
    return f":flag_{country}:"


def detected_pair(result: TranslationResult) -> Optional[Tuple[str, str]]:
    """The detected (src, dst) codes, only trusted on a 200 response."""
    if result.status_code != 200:
        return None
    return parse_lang_pair(result.lang_pair)


def derive_markers(
    result: TranslationResult,
    target_lang: str,
    lookup: LanguageLookup,
) -> Tuple[str, str]:
    """Flag markers for the detected pair, or (target_lang, "N/A")."""
    pair = detected_pair(result)
    if pair is None:
        return target_lang, NO_LANG_PAIR_MARKER
    src, dst = pair
    return flag_marker(lookup(src)), flag_marker(lookup(dst))


def build_reference_link(
    text: Optional[str],
    target_lang: Optional[str],
    src_lang: Optional[str] = None,
) -> str:
    """Link to the same translation on the Yandex web translator.

    Long text is cut so the whole link stays within ``MAX_LINK_LENGTH``.
    """
    target = target_lang or ""
    src = src_lang or ("es" if target == "en" else "en")
    lang = f"&lang={src}-{target}"
    budget = MAX_LINK_LENGTH - len(REFERENCE_URL) - len("?text=") - len(lang)
    return f"{REFERENCE_URL}?text={_quote_within(text or '', budget)}{lang}"


def _quote_within(text: str, budget: int) -> str:
    quoted = quote(text)
    if len(quoted) <= budget:
        return quoted
    # cut on character boundaries so no escape sequence is split
    parts = []
    used = 0
    for ch in text:
        q = quote(ch)
        if used + len(q) > budget:
            break
        parts.append(q)
        used += len(q)
    return "".join(parts)


def format_display(payload: DisplayPayload) -> str:
    return (
        f"{payload.src_marker}  {escape_mentions(payload.original_text)}  ⇒  "
        f"{payload.dst_marker}  **{escape_mentions(payload.translated_text)}**\n"
        f"<{payload.reference_link}>"
    )


class TranslationPipeline:
    """Calls the translation service and normalizes whatever comes back."""

    def __init__(self, translator: TranslatorPort, lookup: LanguageLookup):
        self._translator = translator
        self._lookup = lookup

    async def translate(
        self,
        channel_id: str,
        target_lang: str,
        source_text: str,
    ) -> Union[DisplayPayload, RejectionPayload]:
        try:
            result = await self._translator.translate(source_text, target_lang)
        except Exception as e:
            _log(f"[translate] service call raised: {e!r}")
            return RejectionPayload(channel_id, TRANSLATION_FAILED, target_lang, source_text, None)

        if not isinstance(result, TranslationResult):
            result = TranslationResult.from_payload(result)

        translated = normalize_text(result.text)
        if not translated:
            if result.error:
                _log(f"[translate] service error: {result.error}")
            raw = result.raw if result.raw is not None else result.error
            return RejectionPayload(channel_id, TRANSLATION_FAILED, target_lang, source_text, raw)

        src_marker, dst_marker = derive_markers(result, target_lang, self._lookup)
        pair = detected_pair(result)
        link = build_reference_link(source_text, target_lang, pair[0] if pair else None)
        return DisplayPayload(
            src_marker=src_marker,
            dst_marker=dst_marker,
            original_text=source_text,
            translated_text=translated,
            reference_link=link,
        )

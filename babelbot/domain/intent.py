"""Intent matching and translate command parsing.

Pure Python, no framework dependencies.
"""

import re
from typing import Callable, List, Tuple

from babelbot.domain.models import Intent, TranslateParse, TranslateRequest

# "2es", "⇒ru", "to en", "tr de", optionally after "bot "
DIRECTIONAL_MARKERS = ("2", "⇒", "to", "tr")
_MARKER = "(?:" + "|".join(re.escape(m) for m in DIRECTIONAL_MARKERS) + ")"

TRANSLATE_PREFIX_RE = re.compile(rf"\A(?:bot\s+)?{_MARKER}\s*(\w{{2}})\s+")
# "bot to", "bot 2es": a translate command missing its code or text
BARE_TRANSLATE_RE = re.compile(rf"\Abot\s+{_MARKER}(?:\s*\w{{2}})?\s*\Z")

TRANSLATE_RE = re.compile(rf"\A(?:bot\s+)?{_MARKER}\s*(\w{{2}})\s+(.*)\Z", re.DOTALL)
_PARTIAL_TRANSLATE_RE = re.compile(rf"\A(?:bot\s+)?{_MARKER}\s*(\w{{2}})?\s*(.*)\Z", re.DOTALL)

GREETINGS = ("hi", "bot hi")
HELP_COMMANDS = ("bot help", "help")
COMMAND_PREFIX = "bot"

Rule = Tuple[Callable[[str, str], bool], Intent]


def mention_re(bot_id: str) -> "re.Pattern[str]":
    """Match ``<@bot_id>`` (or Discord's nickname form ``<@!bot_id>``)."""
    return re.compile(rf"<@!?{re.escape(bot_id)}>+")


def is_mentioned(text: str, bot_id: str) -> bool:
    return bool(bot_id) and mention_re(bot_id).search(text) is not None


def is_translate_command(text: str) -> bool:
    return bool(TRANSLATE_PREFIX_RE.match(text) or BARE_TRANSLATE_RE.match(text))


RULES: List[Rule] = [
    (lambda text, bot_id: text in GREETINGS, Intent.GREET),
    (is_mentioned, Intent.MENTION_ACK),
    (lambda text, bot_id: text in HELP_COMMANDS, Intent.HELP),
    (lambda text, bot_id: is_translate_command(text), Intent.TRANSLATE),
    (lambda text, bot_id: text.startswith(COMMAND_PREFIX), Intent.UNKNOWN_COMMAND),
]


def match_intent(text: str, bot_id: str = "") -> Intent:
    """Return the intent of the first rule that matches, in order."""
    for predicate, intent in RULES:
        if predicate(text, bot_id):
            return intent
    return Intent.IGNORE


def parse_translate_request(text: str) -> TranslateParse:
    """Parse ``[bot ]<marker>[ ]<xx> <text>``.

    On failure ``request`` is None and the partial captures (if any) are
    kept so they can be shown back to the user.
    """
    m = TRANSLATE_RE.match(text)
    if m:
        lang, source = m.group(1), m.group(2)
        if source:
            return TranslateParse(lang, source, TranslateRequest(lang, source))
        return TranslateParse(lang, None)

    m = _PARTIAL_TRANSLATE_RE.match(text)
    if not m:
        return TranslateParse()
    lang, source = m.group(1), m.group(2)
    return TranslateParse(lang, source or None)


def is_direct_message(channel_id: str, prefix: str = "D") -> bool:
    """Direct message channels start with a reserved prefix."""
    return bool(prefix) and channel_id.startswith(prefix)

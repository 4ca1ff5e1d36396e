"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Intent(Enum):
    """What an incoming message is asking for."""

    GREET = "greet"
    MENTION_ACK = "mention_ack"
    HELP = "help"
    TRANSLATE = "translate"
    UNKNOWN_COMMAND = "unknown_command"
    IGNORE = "ignore"


@dataclass(frozen=True)
class TranslateRequest:
    target_lang: str  # exactly two word characters
    source_text: str  # never empty


@dataclass(frozen=True)
class TranslateParse:
    """Captures from a translate command; ``request`` is None on failure."""

    target_lang: Optional[str] = None
    source_text: Optional[str] = None
    request: Optional[TranslateRequest] = None


@dataclass(frozen=True)
class DisplayPayload:
    src_marker: str
    dst_marker: str
    original_text: str
    translated_text: str
    reference_link: str


@dataclass(frozen=True)
class RejectionPayload:
    channel_id: str
    error_message: str
    target_lang: Optional[str]
    source_text: Optional[str]
    raw_result: Any = None

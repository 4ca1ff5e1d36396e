"""Port interfaces (Hexagonal Architecture)."""

from babelbot.ports.inbound import ChannelJoined, IncomingMessage
from babelbot.ports.outbound import (
    Attachment,
    NotificationPort,
    TranslationResult,
    TranslatorPort,
)

__all__ = [
    "Attachment",
    "ChannelJoined",
    "IncomingMessage",
    "NotificationPort",
    "TranslationResult",
    "TranslatorPort",
]

"""Outbound ports — interfaces for external system adapters."""

from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable


@dataclass
class TranslationResult:
    """Raw translation service response.

    Nothing here is trusted: any field may be missing or of the wrong type.
    ``error`` is set when the call itself failed (timeout, HTTP error,
    unparseable body) and ``raw`` keeps whatever the service sent back.
    """

    status_code: Optional[int] = None
    lang_pair: Any = None
    text: Any = None
    error: Optional[str] = None
    raw: Any = None

    @classmethod
    def from_payload(cls, payload: Any) -> "TranslationResult":
        if not isinstance(payload, dict):
            return cls(raw=payload)
        code = payload.get("code")
        return cls(
            status_code=code if isinstance(code, int) and not isinstance(code, bool) else None,
            lang_pair=payload.get("lang"),
            text=payload.get("text"),
            raw=payload,
        )


@dataclass
class Attachment:
    """Rich card sent through the structured reply path."""

    fallback: str
    pretext: str
    title: str
    title_link: str
    text: str
    color: str = "#A02020"
    image_url: Optional[str] = None


@runtime_checkable
class TranslatorPort(Protocol):
    """Interface for the translation service."""

    async def translate(self, text: str, target_lang: str) -> TranslationResult: ...


@runtime_checkable
class NotificationPort(Protocol):
    """Interface for sending messages to channels."""

    async def send(self, channel_id: str, text: str) -> None: ...
    async def send_typing(self, channel_id: str) -> None: ...
    async def send_structured(self, channel_id: str, attachment: Attachment) -> None: ...

"""Rejection cards for failed translations."""

import sys
from typing import Any

from babelbot.domain.models import RejectionPayload
from babelbot.domain.translation import build_reference_link
from babelbot.ports.outbound import Attachment, NotificationPort

REJECT_PRETEXT = ":thumbsdown: Yandex.Translate was unable to process your request."
REJECT_TITLE = "Not all services are equally available."
REJECT_COLOR = "#A02020"
NO_RESULT = "no result"


def _log(msg: str):
    print(msg, file=sys.stderr)


def _dump(raw: Any) -> str:
    return NO_RESULT if raw is None else repr(raw)


def format_rejection(rejection: RejectionPayload) -> Attachment:
    """Build the failure card shown to the user."""
    summary = (
        "Failed:\n"
        f"_Destination language:_ “**{rejection.target_lang or ''}**”.\n"
        f"_Text:_ “**{rejection.source_text or ''}**”.\n"
        f"_Error:_ {rejection.error_message}\n"
        f"_Result:_ {_dump(rejection.raw_result)}"
    )
    return Attachment(
        fallback=summary,
        pretext=REJECT_PRETEXT,
        title=REJECT_TITLE,
        title_link=build_reference_link(rejection.source_text, rejection.target_lang),
        text=summary,
        color=REJECT_COLOR,
    )


class ErrorReporter:
    """Sends rejection cards through the structured reply path.

    This is the last place a failure can become visible to the user, so a
    delivery error is logged and dropped rather than raised.
    """

    def __init__(self, notification: NotificationPort):
        self._notification = notification

    async def report(self, rejection: RejectionPayload) -> None:
        try:
            attachment = format_rejection(rejection)
            await self._notification.send_structured(rejection.channel_id, attachment)
        except Exception as e:
            _log(f"[report] could not deliver rejection to {rejection.channel_id}: {e!r}")
            return
        _log(
            f"[report] {rejection.error_message}: "
            f"“{rejection.source_text}” to “{rejection.target_lang}”"
        )

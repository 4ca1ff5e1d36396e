"""ChatAgent — core bot logic, no framework dependencies.

Routes each incoming message to exactly one handler and drives the
translation pipeline. Outbound traffic goes through NotificationPort, so
the agent is testable with mock ports.
"""

import asyncio
import sys
from typing import Awaitable, Callable, Dict, Optional

from babelbot.domain import replies
from babelbot.domain.intent import is_direct_message, match_intent, parse_translate_request
from babelbot.domain.languages import LanguageLookup, get_language_lookup
from babelbot.domain.models import DisplayPayload, Intent, RejectionPayload
from babelbot.domain.report import ErrorReporter
from babelbot.domain.translation import INVALID_INPUT, TranslationPipeline, format_display
from babelbot.ports.inbound import ChannelJoined, IncomingMessage
from babelbot.ports.outbound import NotificationPort, TranslatorPort


def _log(msg: str):
    print(msg, file=sys.stderr)


class ChatAgent:
    """Pure bot logic.

    Handles:
    - Intent matching (greet, mention, help, translate, unknown command)
    - Translation requests and failure reports
    - The greeting posted when the bot joins a channel
    """

    def __init__(
        self,
        bot_name: str,
        translator: TranslatorPort,
        notification: Optional[NotificationPort] = None,
        lookup: Optional[LanguageLookup] = None,
        bot_id: str = "",
        dm_channel_prefix: str = "D",
        greet_delay: float = 1.0,
    ):
        self.bot_name = bot_name
        self.bot_id = bot_id
        self._dm_channel_prefix = dm_channel_prefix
        self._greet_delay = greet_delay
        self._pipeline = TranslationPipeline(
            translator, lookup if lookup is not None else get_language_lookup()
        )
        self._notification: Optional[NotificationPort] = None
        self._reporter: Optional[ErrorReporter] = None
        if notification is not None:
            self.wire(notification)

        self._handlers: Dict[Intent, Callable[[IncomingMessage], Awaitable[None]]] = {
            Intent.GREET: self._handle_greet,
            Intent.MENTION_ACK: self._handle_mention,
            Intent.HELP: self._handle_help,
            Intent.TRANSLATE: self._handle_translate,
            Intent.UNKNOWN_COMMAND: self._handle_unknown,
        }

    def wire(self, notification: NotificationPort, bot_id: Optional[str] = None):
        """Wire up the outbound port. Called by the adapter once connected."""
        self._notification = notification
        self._reporter = ErrorReporter(notification)
        if bot_id is not None:
            self.bot_id = bot_id

    def classify(self, msg: IncomingMessage) -> Intent:
        return match_intent(msg.text, self.bot_id)

    async def handle_message(self, msg: IncomingMessage) -> Intent:
        """Dispatch one message. A failing handler never escapes this call."""
        intent = self.classify(msg)
        handler = self._handlers.get(intent)
        if handler is None or not self._notification:
            return intent
        try:
            await handler(msg)
        except Exception as e:
            _log(f"[{self.bot_name}] {intent.value} handler failed in {msg.channel_id}: {e!r}")
        return intent

    async def handle_channel_joined(self, event: ChannelJoined):
        if not self._notification:
            return
        if self.bot_id and event.joiner_id == self.bot_id:
            try:
                await self._notification.send(event.channel_id, replies.invite_thanks())
            except Exception as e:
                _log(f"[{self.bot_name}] invite greeting failed in {event.channel_id}: {e!r}")
                return
            _log(f"[{self.bot_name}] joined channel {event.channel_id}")
        else:
            _log(f"[{self.bot_name}] someone far less important joined {event.channel_id}")

    # -- Handlers --

    async def _typing(self, channel_id: str):
        try:
            await self._notification.send_typing(channel_id)
        except Exception as e:
            _log(f"[{self.bot_name}] typing indicator failed in {channel_id}: {e!r}")

    async def _handle_greet(self, msg: IncomingMessage):
        await self._typing(msg.channel_id)
        await asyncio.sleep(self._greet_delay)
        await self._notification.send(msg.channel_id, replies.greeting(msg.user_id))
        _log(f"[{self.bot_name}] <@{msg.user_id}> said hi")

        if is_direct_message(msg.channel_id, self._dm_channel_prefix):
            await self._notification.send(msg.channel_id, replies.DIRECT_MESSAGE_NOTE)
            _log(f"[{self.bot_name}] and it was a direct message")

    async def _handle_mention(self, msg: IncomingMessage):
        await self._notification.send(msg.channel_id, replies.MENTION_ACK)
        _log(f"[{self.bot_name}] mentioned by <@{msg.user_id}> in {msg.channel_id}")

    async def _handle_help(self, msg: IncomingMessage):
        await self._notification.send(msg.channel_id, replies.HELP)
        _log(f"[{self.bot_name}] a call for help")

    async def _handle_unknown(self, msg: IncomingMessage):
        await self._notification.send(msg.channel_id, replies.not_understood(msg.user_id))
        _log(f"[{self.bot_name}] unknown command: {msg.text[:80]}")

    async def _handle_translate(self, msg: IncomingMessage):
        parsed = parse_translate_request(msg.text)
        if parsed.request is None:
            await self._reporter.report(
                RejectionPayload(
                    msg.channel_id, INVALID_INPUT, parsed.target_lang, parsed.source_text
                )
            )
            return

        request = parsed.request
        await self._typing(msg.channel_id)
        outcome = await self._pipeline.translate(
            msg.channel_id, request.target_lang, request.source_text
        )
        if isinstance(outcome, DisplayPayload):
            await self._notification.send(msg.channel_id, format_display(outcome))
            _log(
                f"[{self.bot_name}] translated “{outcome.original_text}” "
                f"to “{outcome.translated_text}”"
            )
        else:
            await self._reporter.report(outcome)

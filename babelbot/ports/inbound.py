"""Inbound port — platform-agnostic event representation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class IncomingMessage:
    """Discord/Slack/CLI-agnostic message representation."""

    channel_id: str
    user_id: str
    text: str


@dataclass(frozen=True)
class ChannelJoined:
    """Someone (possibly the bot itself) joined a channel."""

    channel_id: str
    joiner_id: str

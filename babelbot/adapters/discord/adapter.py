"""Discord adapter — bridges discord.Client to ChatAgent.

DiscordBotAdapter is a thin discord.Client subclass that converts Discord
events to IncomingMessage / ChannelJoined and delegates to ChatAgent.

Channel ids cross the port as strings. Direct-message channels are keyed
with the agent's DM prefix ("D<id>") so the domain can tell them apart
without knowing about discord.DMChannel.
"""

import sys
from typing import Optional

import discord

from babelbot.domain.agent import ChatAgent
from babelbot.ports.inbound import ChannelJoined, IncomingMessage
from babelbot.ports.outbound import Attachment

MESSAGE_LIMIT = 2000
EMBED_TITLE_LIMIT = 256
EMBED_DESCRIPTION_LIMIT = 4096


def _log(msg: str):
    print(msg, file=sys.stderr)


def channel_key(channel, dm_prefix: str = "D") -> str:
    """Stable string id for a channel, prefixed for direct messages."""
    if isinstance(channel, discord.DMChannel):
        return f"{dm_prefix}{channel.id}"
    return str(channel.id)


def channel_snowflake(key: str, dm_prefix: str = "D") -> int:
    if dm_prefix and key.startswith(dm_prefix):
        key = key[len(dm_prefix):]
    return int(key)


def to_embed(attachment: Attachment) -> discord.Embed:
    """Render a structured card as a Discord embed."""
    embed = discord.Embed(
        title=attachment.title[:EMBED_TITLE_LIMIT],
        url=attachment.title_link or None,
        description=attachment.text[:EMBED_DESCRIPTION_LIMIT],
        color=discord.Colour(int(attachment.color.lstrip("#"), 16)),
    )
    if attachment.image_url:
        embed.set_image(url=attachment.image_url)
    return embed


def _split_message(text: str, limit: int = MESSAGE_LIMIT):
    """Split a message into chunks that fit Discord's character limit."""
    if len(text) <= limit:
        return [text]
    chunks = []
    while text:
        chunks.append(text[:limit])
        text = text[limit:]
    return chunks


class DiscordNotificationAdapter:
    """NotificationPort implementation using discord.Client."""

    def __init__(self, client: discord.Client, dm_prefix: str = "D"):
        self._client = client
        self._dm_prefix = dm_prefix

    async def _channel(self, channel_id: str):
        snowflake = channel_snowflake(channel_id, self._dm_prefix)
        channel = self._client.get_channel(snowflake)
        if channel is None:
            channel = await self._client.fetch_channel(snowflake)
        return channel

    async def send(self, channel_id: str, text: str) -> None:
        channel = await self._channel(channel_id)
        for chunk in _split_message(text):
            await channel.send(chunk)

    async def send_typing(self, channel_id: str) -> None:
        channel = await self._channel(channel_id)
        await channel.typing()

    async def send_structured(self, channel_id: str, attachment: Attachment) -> None:
        channel = await self._channel(channel_id)
        await channel.send(content=attachment.pretext, embed=to_embed(attachment))


class DiscordBotAdapter(discord.Client):
    """Thin Discord adapter that delegates to ChatAgent."""

    def __init__(self, agent: ChatAgent, dm_prefix: str = "D", **discord_kwargs):
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(intents=intents, **discord_kwargs)
        self._agent = agent
        self._dm_prefix = dm_prefix

    def _to_incoming(self, message: discord.Message) -> IncomingMessage:
        """Convert a Discord message to platform-agnostic IncomingMessage."""
        return IncomingMessage(
            channel_id=channel_key(message.channel, self._dm_prefix),
            user_id=str(message.author.id),
            text=message.content,
        )

    async def on_ready(self):
        _log(
            f"[{self._agent.bot_name}] connected as {self.user} "
            f"to {len(self.guilds)} guild(s)"
        )
        self._agent.wire(DiscordNotificationAdapter(self, self._dm_prefix), str(self.user.id))

    async def on_guild_join(self, guild: discord.Guild):
        channel: Optional[discord.TextChannel] = guild.system_channel
        if channel is None or not self.user:
            _log(f"[{self._agent.bot_name}] joined {guild.name} (no system channel)")
            return
        await self._agent.handle_channel_joined(
            ChannelJoined(
                channel_id=channel_key(channel, self._dm_prefix),
                joiner_id=str(self.user.id),
            )
        )

    async def on_message(self, message: discord.Message):
        # Ignore own messages
        if not self.user or message.author == self.user:
            return
        await self._agent.handle_message(self._to_incoming(message))

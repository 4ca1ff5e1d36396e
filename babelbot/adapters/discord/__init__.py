"""Discord transport."""

from babelbot.adapters.discord.adapter import DiscordBotAdapter, DiscordNotificationAdapter

__all__ = ["DiscordBotAdapter", "DiscordNotificationAdapter"]

"""Launcher for the translation bot."""

import asyncio
import sys
from typing import Optional

from babelbot.adapters.discord.adapter import DiscordBotAdapter
from babelbot.adapters.translate.yandex import YandexTranslateClient
from babelbot.config import AppConfig
from babelbot.domain.agent import ChatAgent
from babelbot.domain.languages import get_language_lookup


def _log(msg: str):
    print(msg, file=sys.stderr)


def build_bot(config: Optional[AppConfig] = None) -> DiscordBotAdapter:
    """Wire translator, lookup table and agent into a Discord client."""
    config = config or AppConfig.from_env()

    translator = YandexTranslateClient(
        api_key=config.translate.api_key,
        url=config.translate.url,
        timeout=config.translate.timeout_seconds,
    )
    if not translator.is_configured:
        _log("YandexTranslateClient not configured, translations will be reported as failed")

    agent = ChatAgent(
        bot_name="babelbot",
        translator=translator,
        lookup=get_language_lookup(config.translate.lang_table_path),
        dm_channel_prefix=config.discord.dm_channel_prefix,
        greet_delay=config.discord.greet_delay_seconds,
    )
    return DiscordBotAdapter(agent, dm_prefix=config.discord.dm_channel_prefix)


async def launch_bot(config: Optional[AppConfig] = None):
    config = config or AppConfig.from_env()
    if not config.discord.token:
        _log("Missing DISCORD_TOKEN! Exiting program")
        return

    bot = build_bot(config)
    try:
        await bot.start(config.discord.token)
    except Exception as e:
        _log(f"[babelbot] crashed: {e}")
        raise


def main():
    asyncio.run(launch_bot())


if __name__ == "__main__":
    main()

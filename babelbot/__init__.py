"""babelbot — a Discord bot that translates messages on request."""

from babelbot.config import CONFIG, AppConfig, __version__
from babelbot.domain import ChatAgent, Intent, LanguageLookup
from babelbot.adapters.translate import YandexTranslateClient

__all__ = [
    "CONFIG",
    "AppConfig",
    "ChatAgent",
    "Intent",
    "LanguageLookup",
    "YandexTranslateClient",
    "__version__",
]

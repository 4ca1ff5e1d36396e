"""Configuration and shared state."""

__version__ = "0.1.0"

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)

DEFAULT_TRANSLATE_URL = "https://translate.yandex.net/api/v1.5/tr.json/translate"
DEFAULT_LANG_TABLE_PATH = str(Path(__file__).parent / "resources" / "lang_to_country.json")


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        _stderr_print(f"Invalid {name}={raw!r}, falling back to {default}")
        return default


CONFIG = {
    # Discord
    "discord_token": os.getenv("DISCORD_TOKEN", ""),
    "dm_channel_prefix": os.getenv("DM_CHANNEL_PREFIX", "D"),
    "greet_delay_seconds": _float_env("GREET_DELAY_SECONDS", 1.0),
    # Yandex.Translate
    "yandex_api_key": os.getenv("YANDEX_TRANSLATE_API_KEY", ""),
    "yandex_url": os.getenv("YANDEX_TRANSLATE_URL", DEFAULT_TRANSLATE_URL),
    "translate_timeout_seconds": _float_env("TRANSLATE_TIMEOUT_SECONDS", 10.0),
    # Language -> country table
    "lang_table_path": os.getenv("LANG_TABLE_PATH", DEFAULT_LANG_TABLE_PATH),
}


# ── Typed config ────────────────────────────────────────────


@dataclass
class TranslateConfig:
    api_key: str = ""
    url: str = DEFAULT_TRANSLATE_URL
    timeout_seconds: float = 10.0
    lang_table_path: str = DEFAULT_LANG_TABLE_PATH


@dataclass
class DiscordConfig:
    token: str = ""
    dm_channel_prefix: str = "D"
    greet_delay_seconds: float = 1.0


@dataclass
class AppConfig:
    """Typed view over CONFIG."""

    discord: DiscordConfig = field(default_factory=DiscordConfig)
    translate: TranslateConfig = field(default_factory=TranslateConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        return cls(
            discord=DiscordConfig(
                token=CONFIG["discord_token"],
                dm_channel_prefix=CONFIG["dm_channel_prefix"],
                greet_delay_seconds=CONFIG["greet_delay_seconds"],
            ),
            translate=TranslateConfig(
                api_key=CONFIG["yandex_api_key"],
                url=CONFIG["yandex_url"],
                timeout_seconds=CONFIG["translate_timeout_seconds"],
                lang_table_path=CONFIG["lang_table_path"],
            ),
        )

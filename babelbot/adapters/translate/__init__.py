"""Translation service adapters."""

from babelbot.adapters.translate.yandex import YandexTranslateClient

__all__ = ["YandexTranslateClient"]

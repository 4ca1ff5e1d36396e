"""Yandex.Translate client — JSON API v1.5 over aiohttp."""

import asyncio
import sys
from typing import Optional

import aiohttp

from babelbot.config import CONFIG
from babelbot.ports.outbound import TranslationResult


def _log(msg: str):
    print(msg, file=sys.stderr)


class YandexTranslateClient:
    """Async Yandex.Translate client implementing TranslatorPort.

    Never raises: timeouts, HTTP errors and unparseable bodies come back as
    a TranslationResult with ``error`` set and ``text`` left empty.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: int = 3,
    ):
        self._api_key = api_key if api_key is not None else CONFIG["yandex_api_key"]
        self._url = url or CONFIG["yandex_url"]
        self._timeout = timeout if timeout is not None else CONFIG["translate_timeout_seconds"]
        self._max_retries = max(1, max_retries)

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def translate(self, text: str, target_lang: str) -> TranslationResult:
        if not self._api_key:
            return TranslationResult(error="YANDEX_TRANSLATE_API_KEY not configured.")

        data = {"key": self._api_key, "text": text, "lang": target_lang}
        timeout = aiohttp.ClientTimeout(total=self._timeout)

        for attempt in range(self._max_retries):
            try:
                async with aiohttp.ClientSession(timeout=timeout) as session:
                    async with session.post(self._url, data=data) as resp:
                        if resp.status == 429 and attempt < self._max_retries - 1:
                            await asyncio.sleep(min(2 ** attempt, 30))
                            continue
                        try:
                            payload = await resp.json(content_type=None)
                        except ValueError:
                            body = await resp.text()
                            return TranslationResult(
                                status_code=resp.status,
                                error=f"HTTP {resp.status}: unparseable body",
                                raw=body[:500],
                            )
                        if payload is None:
                            _log(f"[yandex] HTTP {resp.status} with empty body")
                            return TranslationResult(
                                status_code=resp.status,
                                error=f"HTTP {resp.status}: empty body",
                            )
                        result = TranslationResult.from_payload(payload)
                        if resp.status >= 400:
                            result.error = f"HTTP {resp.status}"
                        return result

            except asyncio.TimeoutError:
                _log(f"[yandex] timed out after {self._timeout}s")
                return TranslationResult(error=f"Timed out after {self._timeout}s")
            except aiohttp.ClientError as e:
                if attempt == self._max_retries - 1:
                    return TranslationResult(error=str(e) or type(e).__name__)
                await asyncio.sleep(min(2 ** attempt, 30))

        return TranslationResult(error="Max retries exceeded")

#!/usr/bin/env python3
"""
Rebuild babelbot/resources/lang_to_country.json

Downloads the Library of Congress ISO 639-2 list and the Ethnologue
language code table, joins them into a two-letter language -> country
map, and merges the result over the existing table (entries the
reference files do not cover are kept).

Usage:
    python scripts/build_lang_table.py
    python scripts/build_lang_table.py --output path/to/table.json --no-merge
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

import aiohttp

from babelbot.config import DEFAULT_LANG_TABLE_PATH
from babelbot.domain.languages import parse_iso639_2, parse_language_codes_tab

ISO_639_2 = "http://www.loc.gov/standards/iso639-2/ISO-639-2_utf-8.txt"
LANG_3_TO_COUNTRY = "http://www.ethnologue.com/sites/default/files/LanguageCodes.tab"


async def _fetch(session: aiohttp.ClientSession, url: str) -> str:
    async with session.get(url) as resp:
        resp.raise_for_status()
        return await resp.text(encoding="utf-8")


async def build(output: Path, merge: bool) -> int:
    timeout = aiohttp.ClientTimeout(total=60)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        iso_text, tab_text = await asyncio.gather(
            _fetch(session, ISO_639_2),
            _fetch(session, LANG_3_TO_COUNTRY),
        )

    table = parse_language_codes_tab(tab_text, parse_iso639_2(iso_text))
    if merge and output.exists():
        existing = json.loads(output.read_text(encoding="utf-8"))
        table = {**existing, **table}

    output.write_text(
        json.dumps(dict(sorted(table.items())), ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
    return len(table)


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--output", default=DEFAULT_LANG_TABLE_PATH)
    parser.add_argument("--no-merge", action="store_true", help="overwrite instead of merging")
    args = parser.parse_args()

    try:
        count = asyncio.run(build(Path(args.output), merge=not args.no_merge))
    except aiohttp.ClientError as e:
        print(f"Download failed: {e}", file=sys.stderr)
        return 1
    print(f"Wrote {count} entries to {args.output}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Language code -> country code lookup.

The table maps ISO 639-1 codes to the (lowercase) ISO 3166 code of the
country where the language is primarily spoken, which is what flag
markers are built from. Unknown codes map to themselves.

The packaged table is produced by ``scripts/build_lang_table.py``.
"""

import json
import sys
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional


def _log(msg: str):
    print(msg, file=sys.stderr)


class LanguageLookup:
    """Read-only language table with identity fallback."""

    def __init__(self, table: Mapping[str, str]):
        self._table = MappingProxyType(dict(table))

    def __call__(self, code: str) -> str:
        return self.lookup(code)

    def __len__(self) -> int:
        return len(self._table)

    def lookup(self, code: str) -> str:
        """Return the country for ``code``, or ``code`` unchanged if unknown."""
        return self._table.get(code, code)

    @classmethod
    def from_file(cls, path: str) -> "LanguageLookup":
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError(f"{path}: expected a JSON object, got {type(raw).__name__}")
        return cls({str(k): str(v) for k, v in raw.items()})


def parse_iso639_2(text: str) -> Dict[str, str]:
    """Map ISO 639-2 three-letter codes to ISO 639-1 codes.

    Rows look like ``ger|deu|de|German|allemand``. Both the bibliographic
    and the terminology code are mapped; rows without a two-letter code
    are skipped.
    """
    three_to_two: Dict[str, str] = {}
    for line in text.lstrip("\ufeff").splitlines():
        fields = line.split("|")
        if len(fields) < 3 or not fields[2]:
            continue
        for three in fields[:2]:
            if three:
                three_to_two[three] = fields[2]
    return three_to_two


def parse_language_codes_tab(text: str, three_to_two: Mapping[str, str]) -> Dict[str, str]:
    """Map ISO 639-1 codes to lowercase country codes.

    ``text`` is the Ethnologue ``LanguageCodes.tab`` file: a header line,
    then ``LangID<TAB>CountryID<TAB>...`` rows. Languages without a
    two-letter code are dropped.
    """
    table: Dict[str, str] = {}
    for line in text.lstrip("\ufeff").splitlines()[1:]:
        fields = line.split("\t")
        if len(fields) < 2:
            continue
        two = three_to_two.get(fields[0])
        if two and fields[1]:
            table[two] = fields[1].strip().lower()
    return table


_default: Optional[LanguageLookup] = None


def get_language_lookup(path: Optional[str] = None) -> LanguageLookup:
    """Load the process-wide table on first use and reuse it afterwards.

    A missing or broken table degrades to an empty one, so every code
    falls back to itself instead of taking the bot down.
    """
    global _default
    if _default is None:
        if path is None:
            from babelbot.config import CONFIG
            path = CONFIG["lang_table_path"]
        try:
            _default = LanguageLookup.from_file(path)
            _log(f"[languages] loaded {len(_default)} entries from {path}")
        except (OSError, ValueError) as e:
            _log(f"[languages] could not load {path}: {e}; using identity lookup")
            _default = LanguageLookup({})
    return _default

"""Identity slugs shared by every feed as the player/team join key."""

from __future__ import annotations

import re
import unicodedata
from typing import Any

_INVALID_CHARS = re.compile(r"[^a-z0-9-]")
_REPEATED_HYPHENS = re.compile(r"-{2,}")


def strip_accents(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def slugify(raw: Any) -> str:
    """Return a lowercase-hyphen slug for ``raw``.

    Any value is accepted; ``None`` and punctuation-only input give ``""``,
    which callers treat as "no identity".

    >>> slugify("Kylian Mbappé")
    'kylian-mbappe'
    """

    if raw is None:
        return ""
    text = strip_accents(str(raw)).lower()
    text = _INVALID_CHARS.sub("-", text)
    text = _REPEATED_HYPHENS.sub("-", text)
    return text.strip("-")


def collation_key(name: str) -> tuple[str, str]:
    """Locale-independent sort key for display names."""

    return strip_accents(name).casefold(), name

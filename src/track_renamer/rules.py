"""Centralized naming rules for deterministic track renaming.

Supported extensions, disallowed characters and the regex rules used by
the normalizer are defined here and referenced by the other modules
(single source of truth).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

# ---------------------------------------------------------------------------
# File selection
AUDIO_EXTENSIONS: Tuple[str, ...] = (".mp3", ".wav", ".flac")
_EXT_ALTERNATION = "|".join(re.escape(ext) for ext in AUDIO_EXTENSIONS)
AUDIO_FILE_RE = re.compile(f"(?:{_EXT_ALTERNATION})\\Z", re.IGNORECASE)

# ---------------------------------------------------------------------------
# Sanitization
DISALLOWED_CHARS = '/:*?"<>|'
DISALLOWED_CHARS_RE = re.compile(f"[{re.escape(DISALLOWED_CHARS)}]")
MULTI_SPACE_RE = re.compile(r" +")

# First letter of a word. An apostrophe does not open a new word.
WORD_START_RE = re.compile(r"(?<![\w'])\w")

# Canonical output layout
SEPARATOR = " - "
DEFAULT_FOLDER = "./music"


@dataclass(frozen=True)
class NamingRule:
    """A named regex with explicit capture groups.

    ``usable`` marks whether a match carries enough structure to build a
    canonical name. Groups a rule may define: ``index``, ``artist``,
    ``title``, ``mix``, ``extension``.
    """

    name: str
    pattern: re.Pattern
    usable: bool = True


_EXT = f"(?P<extension>{_EXT_ALTERNATION})"
_MIX = r"(?P<mix> \(.*?\))?"

FULL_INFO_RULE = NamingRule(
    name="full-info",
    pattern=re.compile(
        r"^(?P<index>\d+\.?\s?-?\s?)?(?P<artist>.*)-(?P<title>.*?)" + _MIX + _EXT + r"\Z",
        re.IGNORECASE,
    ),
)

# Loose detection of names carrying only a title or an artist. It is
# matched and reported but never produces a new name.
TITLE_OR_ARTIST_RULE = NamingRule(
    name="title-or-artist",
    pattern=re.compile(
        r"^(?P<index>\d+\.?\s?)?(?P<head>\w*-?\w*)(?P<title>.*?)" + _MIX + _EXT + r"\Z",
        re.IGNORECASE,
    ),
    usable=False,
)

RULES: Tuple[NamingRule, ...] = (FULL_INFO_RULE, TITLE_OR_ARTIST_RULE)

"""Filename normalization for Track Renamer.

A raw filename such as ``01. daft_punk - one more time (radio edit).MP3``
is mapped to the canonical ``Daft Punk - One More Time (radio edit).mp3``.

Matching tries each rule from :mod:`track_renamer.rules` in order:

1. ``full-info``: optional leading track number, ``artist - title``,
   optional parenthesized mix tag, extension.
2. ``title-or-artist``: a loose fallback that only detects names without
   a usable artist/title split. It never yields a new name.

When nothing usable matched the normalized name is the empty string,
meaning "leave the file alone".  All functions here are pure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from . import rules


@dataclass(frozen=True)
class NameMatch:
    """Outcome of matching one raw filename against the naming rules."""

    original: str
    rule: Optional[str] = None
    index: str = ""
    artist: str = ""
    title: str = ""
    mix: str = ""
    extension: str = ""
    normalized: str = ""

    @property
    def matched(self) -> bool:
        return self.rule is not None

    @property
    def usable(self) -> bool:
        return bool(self.normalized)


def sanitize_file_name(file_name: str) -> str:
    """Strip characters illegal in filenames, collapse spaces and trim."""
    cleaned = rules.DISALLOWED_CHARS_RE.sub("", file_name)
    cleaned = rules.MULTI_SPACE_RE.sub(" ", cleaned)
    return cleaned.strip()


def capitalize_words(text: str) -> str:
    """Upper-case the first letter of every word, leaving the rest as written."""
    return rules.WORD_START_RE.sub(lambda m: m.group(0).upper(), text)


def _build_name(artist: str, title: str, mix: str, extension: str) -> str:
    if artist and title:
        stem = f"{artist}{rules.SEPARATOR}{title}"
    else:
        stem = artist or title
    if not stem:
        return ""
    return sanitize_file_name(f"{stem}{mix}{extension}")


def match_file_name(file_name: str) -> NameMatch:
    """Run ``file_name`` through the naming rules and return the match."""
    candidate = file_name.replace("_", " ")

    for rule in rules.RULES:
        m = rule.pattern.match(candidate)
        if m is None:
            continue
        groups = m.groupdict()
        index = (groups.get("index") or "").strip()
        mix = groups.get("mix") or ""
        extension = (groups.get("extension") or "").lower()
        if not rule.usable:
            return NameMatch(
                original=file_name,
                rule=rule.name,
                index=index,
                title=(groups.get("title") or "").strip(),
                mix=mix,
                extension=extension,
            )
        artist = capitalize_words((groups.get("artist") or "").strip())
        title = capitalize_words((groups.get("title") or "").strip())
        return NameMatch(
            original=file_name,
            rule=rule.name,
            index=index,
            artist=artist,
            title=title,
            mix=mix,
            extension=extension,
            normalized=_build_name(artist, title, mix, extension),
        )

    return NameMatch(original=file_name)


def format_file_name(file_name: str) -> str:
    """Return the canonical name for ``file_name`` or ``""`` if none applies."""
    return match_file_name(file_name).normalized


def is_audio_file(file_name: str) -> bool:
    return rules.AUDIO_FILE_RE.search(file_name) is not None

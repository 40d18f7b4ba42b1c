"""Track Renamer package

This package contains the filename normalizer, the rename engine and
the command-line interface for tidying up folders of music files
(mp3/wav/flac) into ``Artist - Title (Mix).ext`` names and removing
duplicate copies.

Public names are re-exported here for convenience.
"""

from .engine import RenameEngine, get_music_files  # noqa: F401
from .normalizer import (  # noqa: F401
    NameMatch,
    format_file_name,
    match_file_name,
    sanitize_file_name,
)

__version__ = "1.0.0"

__all__ = [
    "RenameEngine",
    "get_music_files",
    "NameMatch",
    "format_file_name",
    "match_file_name",
    "sanitize_file_name",
]

"""Command-line interface for Track Renamer.

Scans a folder of mp3/wav/flac files and reports (or, with
``--change``, applies) canonical ``Artist - Title (Mix).ext`` renames
and duplicate deletions.  Delegates to
:class:`track_renamer.engine.RenameEngine`.
Run ``python -m track_renamer --help`` for usage.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from . import console
from .engine import RenameEngine
from .rules import DEFAULT_FOLDER

INVALID_FOLDER_MESSAGE = "Error: The specified path does not exist or is not a folder."


def _parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="track-renamer",
        description="Track Renamer - normalize music filenames and remove duplicates",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "folder",
        nargs="?",
        default=DEFAULT_FOLDER,
        help="Folder containing the music files",
    )
    parser.add_argument(
        "--change",
        action="store_true",
        help="Apply renames and delete duplicates (otherwise only report them)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the run report as JSON after the run",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Also report files whose name could not be normalized",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable coloured output",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_arguments(argv)
    color = not args.no_color
    if color:
        console.enable_windows_ansi()

    folder_path = Path(args.folder).expanduser().resolve()
    if not folder_path.is_dir():
        # Reported, not raised; the process still exits normally.
        console.emit(INVALID_FOLDER_MESSAGE, console.INFO, color=color)
        return 0

    engine = RenameEngine(
        folder=folder_path,
        apply_changes=args.change,
        verbose=args.verbose,
        color=color,
    )
    report = engine.run()
    if args.json:
        print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

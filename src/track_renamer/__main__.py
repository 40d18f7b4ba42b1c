# src/track_renamer/__main__.py
from __future__ import annotations

import sys


def main() -> int:
    """
    Module entrypoint:
      - python -m track_renamer                   -> scan ./music, report only
      - python -m track_renamer <folder> --change -> apply renames/deletions
    """
    from track_renamer.cli import main as cli_main

    # Let the CLI parse sys.argv itself.
    return int(cli_main(sys.argv[1:]))


if __name__ == "__main__":
    raise SystemExit(main())

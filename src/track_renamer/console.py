"""Coloured console output for Track Renamer.

Messages carry a semantic level (``info``, ``success``, ``warn``,
``error``) which maps to a terminal colour via colorama.
"""

from __future__ import annotations

from typing import Dict, Optional, TextIO

from colorama import Fore, Style, just_fix_windows_console

INFO = "info"
SUCCESS = "success"
WARN = "warn"
ERROR = "error"

LEVEL_COLORS: Dict[str, str] = {
    INFO: Fore.WHITE,
    SUCCESS: Fore.GREEN,
    WARN: Fore.YELLOW,
    ERROR: Fore.RED,
}


def enable_windows_ansi() -> None:
    """Let legacy Windows consoles render ANSI colours (no-op elsewhere)."""
    just_fix_windows_console()


def format_message(message: str, level: str = INFO, color: bool = True) -> str:
    """Return ``message`` wrapped in the colour for ``level``."""
    try:
        code = LEVEL_COLORS[level]
    except KeyError:
        raise ValueError(f"Unknown console level: {level!r}") from None
    if not color:
        return message
    return f"{code}{message}{Style.RESET_ALL}"


def emit(message: str, level: str = INFO, color: bool = True, stream: Optional[TextIO] = None) -> None:
    print(format_message(message, level, color=color), file=stream)

"""Single-keypress reader for the terminal frontend.

Arrow keys and WASD move tiles; no Enter needed.
Works on macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys

from backend.settings import QUICK_SIZES

# -- key mapping ---------------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
    "r": "restart",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def resolve(ch: str) -> str:
    """Map a raw character to its action string.

    Digits naming a quick size become ``"size:<n>"``.
    """
    if ch.isdigit() and int(ch) in QUICK_SIZES:
        return f"size:{ch}"
    return _KEY_MAP.get(ch.lower() if ch.isalpha() else ch, "")


def resolve_escape(seq: str) -> str:
    """Map the bytes following ESC; a bare Escape quits."""
    if not seq:
        return "quit"
    if seq[0] == "[" and len(seq) > 1:
        return _ARROW_MAP.get(seq[1], "")
    return ""


# -- readers -------------------------------------------------------------------


def _read_unix(timeout: float | None) -> str | None:
    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None

        # os.read is unbuffered, so select() still sees the rest of an
        # escape sequence.
        ch = os.read(fd, 1).decode("utf-8", errors="ignore")
        if ch != "\x1b":
            return resolve(ch)

        seq = ""
        while len(seq) < 2 and select.select([fd], [], [], 0.05)[0]:
            seq += os.read(fd, 1).decode("utf-8", errors="ignore")
        return resolve_escape(seq)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def _read_windows(timeout: float | None) -> str | None:
    import msvcrt  # type: ignore[import-not-found]
    import time

    end = None if timeout is None else time.monotonic() + timeout
    while not msvcrt.kbhit():
        if end is not None and time.monotonic() >= end:
            return None
        time.sleep(0.02)
    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        return {"H": "up", "P": "down", "K": "left", "M": "right"}.get(
            msvcrt.getwch(), ""
        )
    return resolve(ch)


_read = _read_windows if os.name == "nt" else _read_unix


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Block until a key is pressed and return its action string.

    Possible return values:
        "up", "down", "left", "right"  — movement
        "quit"                         — q / Ctrl-C / Escape
        "restart"                      — r
        "size:<n>"                     — a quick-size digit
        ""                             — unrecognised key
    """
    key = _read(None)
    return key if key is not None else ""


def get_key_timeout(timeout: float) -> str | None:
    """Like :func:`get_key` but return ``None`` after *timeout* seconds."""
    return _read(timeout)

"""Cross-platform keypress reader for the terminal frontend.

Handles arrow keys, WASD, and special keys without requiring Enter.
Works on macOS / Linux (tty+termios, fed into the asyncio loop) and
Windows (msvcrt, polled from a worker thread).
"""

from __future__ import annotations

import asyncio
import os
import sys
import threading


# -- shared key mapping --------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "W": "up",
    "s": "down",
    "S": "down",
    "a": "left",
    "A": "left",
    "d": "right",
    "D": "right",
    "q": "quit",
    "Q": "quit",
    "\x03": "quit",  # Ctrl-C
    "r": "randomize",
    "R": "randomize",
    "x": "reset",
    "X": "reset",
    " ": "tap",
    "\r": "tap",
    "\n": "tap",
}

_ARROW_MAP: dict[str, str] = {
    "A": "cursor_up",
    "B": "cursor_down",
    "C": "cursor_right",
    "D": "cursor_left",
}


def _resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    return _KEY_MAP.get(ch, ch if ch.isprintable() else "")


def decode(chars: str) -> list[str]:
    """Translate a chunk of raw terminal input into action strings.

    A chunk may hold several keypresses, e.g. ``"\\x1b[Aw"`` decodes to
    ``["cursor_up", "up"]``.  Possible actions:

        "up", "down", "left", "right"      : slide a tile (WASD)
        "cursor_up" … "cursor_right"       : move the cursor (arrows)
        "tap"                              : Space / Enter on the cursor cell
        "randomize"                        : r
        "reset"                            : x
        "quit"                             : q / Ctrl-C / Escape
        "<char>"                           : unmapped printable char
    """
    actions: list[str] = []
    i = 0
    while i < len(chars):
        ch = chars[i]
        if ch == "\x1b":
            if chars[i + 1 : i + 2] == "[":
                # A trailing "\x1b[" with no final byte yields nothing.
                action = _ARROW_MAP.get(chars[i + 2 : i + 3], "")
                if action:
                    actions.append(action)
                i += 3
                continue
            actions.append("quit")  # bare Escape
            i += 1
            continue
        action = _resolve(ch)
        if action:
            actions.append(action)
        i += 1
    return actions


class KeyDecoder:
    """Stateful :func:`decode` for a stream read in arbitrary chunks.

    An escape-sequence prefix at the end of one chunk is held back and
    joined to the next, so an arrow key split across two reads is not
    mistaken for a bare Escape.
    """

    def __init__(self) -> None:
        self._pending = ""

    def feed(self, chars: str) -> list[str]:
        chars = self._pending + chars
        self._pending = ""
        if chars.endswith("\x1b["):
            chars, self._pending = chars[:-2], chars[-2:]
        return decode(chars)


# -- low-level readers ---------------------------------------------------------


def _getch_windows() -> str:
    import msvcrt  # type: ignore[import-not-found]

    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        code = msvcrt.getwch()
        return {"H": "\x1b[A", "P": "\x1b[B", "M": "\x1b[C", "K": "\x1b[D"}.get(
            code, ""
        )
    return ch


# -- public API ----------------------------------------------------------------


class KeyReader:
    """Async source of decoded actions for the lifetime of a ``with`` block.

    On Unix the terminal is switched to cbreak mode (keys arrive without
    Enter, output processing stays on so Rich can keep drawing) and stdin is
    watched by the running event loop.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[str] = asyncio.Queue()
        self._fd = sys.stdin.fileno()
        self._old: list | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._closed = False
        self._decoder = KeyDecoder()

    def __enter__(self) -> KeyReader:
        self._loop = asyncio.get_running_loop()
        if os.name == "nt":
            threading.Thread(target=self._poll_windows, daemon=True).start()
            return self

        import termios
        import tty

        self._old = termios.tcgetattr(self._fd)
        tty.setcbreak(self._fd)
        self._loop.add_reader(self._fd, self._on_readable)
        return self

    def __exit__(self, *exc: object) -> None:
        self._closed = True
        if os.name == "nt" or self._loop is None:
            return

        import termios

        self._loop.remove_reader(self._fd)
        if self._old is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._old)

    async def get(self) -> str:
        """Wait for the next action."""
        return await self._queue.get()

    def push(self, action: str) -> None:
        """Inject an action, e.g. to stop the loop from a callback."""
        self._queue.put_nowait(action)

    def _on_readable(self) -> None:
        # Read up to a full escape sequence per wakeup; os.read is
        # unbuffered so no bytes are left behind in sys.stdin's buffer.
        data = os.read(self._fd, 32).decode("utf-8", errors="ignore")
        for action in self._decoder.feed(data):
            self._queue.put_nowait(action)

    def _poll_windows(self) -> None:
        assert self._loop is not None
        while not self._closed:
            data = _getch_windows()
            for action in decode(data):
                self._loop.call_soon_threadsafe(self._queue.put_nowait, action)

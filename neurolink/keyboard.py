from __future__ import annotations

import getpass
import logging
import sys
import termios
from collections import deque
from typing import Deque, Optional

from blessed import Terminal

from .constants import KEY_ENTER, KEY_ESCAPE

logger = logging.getLogger(__name__)

# Named keys blessed decodes from escape sequences, mapped onto the
# single characters scenes understand.
KEY_ALIASES = {
    "KEY_UP": "w",
    "KEY_DOWN": "s",
    "KEY_LEFT": "a",
    "KEY_RIGHT": "d",
    "KEY_ENTER": KEY_ENTER,
    "KEY_ESCAPE": KEY_ESCAPE,
}


class InputSource:
    """Raw-mode keyboard reader with a bounded poll.

    Raw mode is applied on construction and undone by :meth:`close`, which is
    also run when the object is used as a context manager.
    """

    def __init__(self, term: Terminal | None = None, fd: int | None = None) -> None:
        self.term = term if term is not None else Terminal()
        if fd is None and sys.stdin is not None and sys.stdin.isatty():
            fd = sys.stdin.fileno()
        self.fd = fd
        self.raw_mode = False
        self._saved: list | None = None
        self._pending: Deque[str] = deque()
        self.enable_raw_mode()

    def __enter__(self) -> "InputSource":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # --- Terminal modes -----------------------------------------------
    def enable_raw_mode(self) -> None:
        """Disable line buffering, echo, signal keys and output processing."""
        if self.raw_mode:
            return
        if self.fd is None:
            logger.debug("stdin is not a tty; raw mode skipped")
            return
        try:
            self._saved = termios.tcgetattr(self.fd)
            raw = termios.tcgetattr(self.fd)
            raw[0] &= ~(termios.ICRNL | termios.IXON)
            raw[1] &= ~termios.OPOST
            raw[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
            # Reads return after 0.1s even when no byte is available.
            raw[6][termios.VMIN] = 0
            raw[6][termios.VTIME] = 1
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, raw)
        except termios.error as exc:
            logger.warning("could not enter raw mode: %s", exc)
            return
        self.raw_mode = True

    def disable_raw_mode(self) -> None:
        """Put back the settings captured by :meth:`enable_raw_mode`."""
        if not self.raw_mode:
            return
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._saved)
        except termios.error as exc:
            logger.warning("could not restore terminal settings: %s", exc)
        self.raw_mode = False

    def close(self) -> None:
        self.disable_raw_mode()

    # --- Reading ------------------------------------------------------
    def push_key(self, key: str) -> None:
        """Queue ``key`` to be returned by the next :meth:`next_key`."""
        self._pending.append(key)

    def next_key(self, timeout: float) -> Optional[str]:
        """Return the next key, or ``None`` if none arrives within ``timeout``."""
        if self._pending:
            return self._pending.popleft()
        keystroke = self.term.inkey(timeout=timeout)
        if not keystroke:
            return None
        if keystroke.is_sequence:
            alias = KEY_ALIASES.get(keystroke.name)
            if alias is not None:
                return alias
            logger.debug("ignoring unmapped key %s", keystroke.name)
            return None
        return str(keystroke)[0]

    def read_line(self, prompt: str | None = None, echo: bool = True) -> str:
        """Read a full line with canonical mode temporarily restored."""
        was_raw = self.raw_mode
        self.disable_raw_mode()
        try:
            if echo:
                return input(prompt or "")
            return getpass.getpass(prompt or "")
        except EOFError:
            return ""
        finally:
            if was_raw:
                self.enable_raw_mode()

from __future__ import annotations

import sys
import time
import logging
from typing import Callable, TextIO

from blessed import Terminal

from .constants import (
    BAR_EMPTY,
    BAR_FILLED,
    BOX_BOTTOM_LEFT,
    BOX_BOTTOM_RIGHT,
    BOX_HORIZONTAL,
    BOX_TOP_LEFT,
    BOX_TOP_RIGHT,
    BOX_VERTICAL,
    CLEAR,
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    DIMMED,
    HIDE_CURSOR,
    HOME,
    SHOW_CURSOR,
    TRANSITION_STEPS,
    Color,
)

logger = logging.getLogger(__name__)


def restore_terminal(stream: TextIO | None = None) -> None:
    """Reset colours, show the cursor and clear the screen.

    Holds no state so it is safe to call from a signal handler at any point,
    including halfway through a frame.
    """
    if stream is None:
        stream = sys.stdout
    stream.write(Color.RESET.sequence + SHOW_CURSOR + CLEAR + HOME)
    stream.flush()


class Renderer:
    """Double-buffered character renderer writing ANSI sequences."""

    def __init__(
        self, stream: TextIO | None = None, term: Terminal | None = None
    ) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.term = term if term is not None else Terminal(stream=self.stream)
        # Size is read once; live resizing is not followed.
        self.width, self.height = self.size()
        self._chars: list[list[str]] = []
        self._colors: list[list[Color]] = []
        # Number of colour escapes written by the last ``end_frame``.
        self.color_switches = 0
        self.begin_frame()

    def size(self) -> tuple[int, int]:
        """Return the terminal ``(width, height)``, or 80x24 if unknown."""
        if not self.term.is_a_tty:
            return DEFAULT_WIDTH, DEFAULT_HEIGHT
        try:
            width, height = self.term.width, self.term.height
        except (OSError, ValueError) as exc:
            logger.debug("terminal size query failed: %s", exc)
            return DEFAULT_WIDTH, DEFAULT_HEIGHT
        if width <= 0 or height <= 0:
            return DEFAULT_WIDTH, DEFAULT_HEIGHT
        return width, height

    # --- Screen lifecycle ---------------------------------------------
    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def clear_screen(self) -> None:
        self._write(CLEAR + HOME)
        self.begin_frame()

    def hide_cursor(self) -> None:
        self._write(HIDE_CURSOR)

    def show_cursor(self) -> None:
        self._write(SHOW_CURSOR)

    def reset_terminal(self) -> None:
        restore_terminal(self.stream)

    # --- Frame lifecycle ----------------------------------------------
    def begin_frame(self) -> None:
        """Blank the buffer so the frame is drawn from a clean slate."""
        self._chars = [[" "] * self.width for _ in range(self.height)]
        self._colors = [[Color.RESET] * self.width for _ in range(self.height)]

    def end_frame(self) -> None:
        """Write the buffer to the terminal and flush."""
        start = time.perf_counter()
        out: list[str] = [HOME]
        current: Color | None = None
        switches = 0
        for y in range(self.height):
            row = self._chars[y]
            color_row = self._colors[y]
            for x in range(self.width):
                color = color_row[x]
                if color is not current:
                    out.append(color.sequence)
                    current = color
                    switches += 1
                out.append(row[x])
            if y < self.height - 1:
                out.append("\r\n")
        out.append(Color.RESET.sequence)
        self.stream.write("".join(out))
        self.stream.flush()
        self.color_switches = switches
        logger.debug(
            "end_frame took %.2f ms (%d colour switches)",
            (time.perf_counter() - start) * 1000,
            switches,
        )

    def cell(self, x: int, y: int) -> tuple[str, Color]:
        """Return the buffered glyph and colour at ``(x, y)``."""
        return self._chars[y][x], self._colors[y][x]

    # --- Drawing ------------------------------------------------------
    @staticmethod
    def shade(color: Color, opacity: float) -> Color | None:
        """Return ``color`` as it should appear at ``opacity``.

        ``None`` means fully transparent; drawing calls skip it.
        """
        if opacity <= 0:
            return None
        if opacity >= 0.7:
            return color
        if opacity >= 0.35:
            return DIMMED.get(color, color)
        return Color.BRIGHT_BLACK

    def draw_text(
        self, x: int, y: int, text: str, color: Color | None = Color.RESET
    ) -> None:
        if color is None or not 0 <= y < self.height:
            return
        row = self._chars[y]
        color_row = self._colors[y]
        for offset, ch in enumerate(text):
            cx = x + offset
            if 0 <= cx < self.width:
                row[cx] = ch
                color_row[cx] = color

    def draw_text_centered(
        self, y: int, text: str, color: Color | None = Color.RESET
    ) -> None:
        x = (self.width - len(text)) // 2
        self.draw_text(x, y, text, color)

    def draw_box(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        title: str = "",
        color: Color | None = Color.RESET,
    ) -> None:
        """Draw a rounded box, embedding ``title`` in the top edge if it fits."""
        if width <= 0 or height <= 0:
            return
        inner = max(0, width - 2)
        top = BOX_TOP_LEFT + BOX_HORIZONTAL * inner + BOX_TOP_RIGHT
        if title:
            label = f" {title} "
            start = (width - len(label)) // 2
            end = start + len(label)
            if start > 0 and end <= width - 1:
                top = top[:start] + label + top[end:]
        self.draw_text(x, y, top[:width], color)
        for i in range(1, height - 1):
            self.draw_text(x, y + i, BOX_VERTICAL, color)
            if width > 1:
                self.draw_text(x + width - 1, y + i, BOX_VERTICAL, color)
        if height > 1:
            bottom = BOX_BOTTOM_LEFT + BOX_HORIZONTAL * inner + BOX_BOTTOM_RIGHT
            self.draw_text(x, y + height - 1, bottom[:width], color)

    def draw_progress_bar(
        self,
        x: int,
        y: int,
        width: int,
        progress: float,
        fill_color: Color | None = Color.BRIGHT_GREEN,
        empty_color: Color | None = Color.BRIGHT_BLACK,
    ) -> None:
        width = max(0, width)
        progress = max(0.0, min(1.0, progress))
        filled = min(width, round(width * progress))
        self.draw_text(x, y, BAR_FILLED * filled, fill_color)
        self.draw_text(x + filled, y, BAR_EMPTY * (width - filled), empty_color)

    # --- Animation ----------------------------------------------------
    def transition(
        self,
        duration: float,
        render_step: Callable[[float], None],
        steps: int = TRANSITION_STEPS,
    ) -> None:
        """Play ``steps + 1`` frames with progress running from 0 to 1."""
        step_duration = duration / steps
        for i in range(steps + 1):
            start = time.perf_counter()
            progress = i / steps
            self.begin_frame()
            render_step(progress)
            self.end_frame()
            remaining = step_duration - (time.perf_counter() - start)
            if remaining > 0:
                time.sleep(remaining)

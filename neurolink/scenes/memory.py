from __future__ import annotations

import logging
import math
import random
from typing import TYPE_CHECKING, List

from ..constants import (
    BASE_COLOR,
    DANGER_COLOR,
    DIM_COLOR,
    HIGHLIGHT_COLOR,
    KEY_ENTER,
    PICKED_COLOR,
    SUCCESS_COLOR,
    Difficulty,
    Skill,
)
from ..scene import Scene
from .widgets import format_clock

if TYPE_CHECKING:  # pragma: no cover - imports for type hints only
    from ..renderer import Renderer
    from ..state import GameState

logger = logging.getLogger(__name__)

CHALLENGE_ID = "memory_reassembly"
# Alert raised by every rejected submission
FAILURE_ALERT = 0.1

PATTERNS = [
    "0x48A7F1",
    "0xB349EC",
    "0x2DE5C8",
    "0x92F76B",
    "0x5C31D0",
    "0xA18F29",
    "0x6B72E4",
    "0xF39D1C",
    "0x7E25B8",
    "0x3AF65D",
    "0xD1C84B",
]


class MemoryReassemblyScene(Scene):
    """Put shuffled memory fragments back into sequence against the clock."""

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.NORMAL,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__()
        self.difficulty = difficulty
        self.rng = rng if rng is not None else random.Random()
        level = difficulty.value
        self.time_limit = 120.0 - level * 20.0
        self.max_attempts = 5 - level
        self.fragment_count = 5 + level * 2
        self.fragments: List[str] = []
        self.correct_order: List[int] = []
        self.current_order: List[int] = []
        self.setup_puzzle()

    def setup_puzzle(self) -> None:
        """Generate the fragments and shuffle them out of order."""
        count = self.fragment_count
        self.fragments = [
            f"[{i + 1}/{count}] {PATTERNS[i % len(PATTERNS)]}{i:02X}"
            for i in range(count)
        ]
        self.correct_order = list(range(count))
        self.current_order = list(self.correct_order)
        while self.current_order == self.correct_order:
            self.rng.shuffle(self.current_order)
        self.selected = 0
        self.incorrect_attempts = 0
        self.time_left = self.time_limit
        self.won = False
        self.lost = False
        self.restart_clock()

    @property
    def attempts_left(self) -> int:
        return self.max_attempts - self.incorrect_attempts

    def swap(self, a: int, b: int) -> None:
        order = self.current_order
        if 0 <= a < len(order) and 0 <= b < len(order):
            order[a], order[b] = order[b], order[a]

    def submit(self, state: GameState) -> None:
        if self.current_order == self.correct_order:
            self.won = True
            state.record_solve(CHALLENGE_ID, Skill.CRYPTOGRAPHY)
            state.lower_alert(FAILURE_ALERT)
            return
        self.incorrect_attempts += 1
        state.record_failure(alert=FAILURE_ALERT)
        logger.debug(
            "wrong order submitted (%d/%d)", self.incorrect_attempts, self.max_attempts
        )
        if self.incorrect_attempts >= self.max_attempts:
            self.lost = True

    # --- Scene interface ----------------------------------------------
    def handle_input(self, key: str, state: GameState) -> None:
        if self.finished:
            return
        if key in ("q", "Q"):
            self._to_menu()
            return
        if key in ("r", "R"):
            self.setup_puzzle()
            return
        if self.won or self.lost:
            if key in (KEY_ENTER, " "):
                self._to_menu()
            return

        last = len(self.current_order) - 1
        if key in ("w", "W"):
            self.selected = max(0, self.selected - 1)
        elif key in ("s", "S"):
            self.selected = min(last, self.selected + 1)
        elif key in ("a", "A"):
            if self.selected > 0:
                self.swap(self.selected, self.selected - 1)
                self.selected -= 1
        elif key in ("d", "D"):
            if self.selected < last:
                self.swap(self.selected, self.selected + 1)
                self.selected += 1
        elif len(key) == 1 and "1" <= key <= "9":
            index = int(key) - 1
            if index <= last:
                self.selected = index
        elif key in (KEY_ENTER, " "):
            self.submit(state)

    def update(self, state: GameState) -> None:
        if self.finished or self.won or self.lost:
            return
        self.time_left = max(0.0, self.time_limit - self.elapsed)
        if self.time_left <= 0:
            self.lost = True
            state.record_failure(alert=FAILURE_ALERT)
            logger.info("memory reassembly timed out")

    def _to_menu(self) -> None:
        from .menu import MainMenuScene

        self.hand_off(MainMenuScene())

    def render(self, renderer: Renderer, opacity: float = 1.0) -> None:
        shade = renderer.shade
        base = shade(BASE_COLOR, opacity)
        dim = shade(DIM_COLOR, opacity)
        success = shade(SUCCESS_COLOR, opacity)
        danger = shade(DANGER_COLOR, opacity)

        if self.won:
            renderer.draw_text_centered(2, "MEMORY RECONSTRUCTION COMPLETE", success)
        elif self.lost:
            renderer.draw_text_centered(2, "MEMORY RECONSTRUCTION FAILED", danger)
        else:
            renderer.draw_text_centered(2, "MEMORY FRAGMENT REASSEMBLY", base)

        if self.won or self.lost:
            hint = "Press ENTER to continue, R to restart"
        else:
            hint = "Rearrange memory fragments into correct sequence"
        renderer.draw_text_centered(3, hint, dim)

        renderer.draw_text(2, 2, "Time: " + format_clock(self.time_left), dim)
        attempts = f"Attempts: {self.attempts_left}/{self.max_attempts}"
        renderer.draw_text(
            renderer.width - len(attempts) - 2,
            2,
            attempts,
            danger if self.attempts_left <= 1 else dim,
        )

        list_x, list_y = 10, 6
        frame = success if self.won else danger if self.lost else base
        renderer.draw_box(
            list_x - 2,
            list_y - 1,
            renderer.width - 16,
            len(self.current_order) + 3,
            color=frame,
        )
        pulse = math.sin(self.elapsed * 8) * 0.5 + 0.5
        for row, fragment_index in enumerate(self.current_order):
            color = dim
            if row == self.selected:
                color = shade(PICKED_COLOR if pulse > 0.7 else HIGHLIGHT_COLOR, opacity)
            elif self.won:
                color = success
            text = f"{row + 1}. {self.fragments[fragment_index]}"
            renderer.draw_text(list_x, list_y + row, text, color)

        controls_y = list_y + len(self.current_order) + 3
        renderer.draw_text_centered(
            controls_y,
            "W/S: Select   A/D: Reorder   1-9: Jump   ENTER: Submit   R: Reset   Q: Quit",
            dim,
        )
        if self.won:
            renderer.draw_text_centered(
                controls_y + 2, "Memory successfully reconstructed!", success
            )
        elif self.lost:
            if self.time_left <= 0:
                message = "Time expired - reconstruction failed!"
            else:
                message = "Too many incorrect attempts - data corrupted!"
            renderer.draw_text_centered(controls_y + 2, message, danger)
        else:
            renderer.draw_text_centered(
                controls_y + 2, "Hint: Read the sequence identifiers carefully", base
            )

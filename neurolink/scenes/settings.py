from __future__ import annotations

from typing import TYPE_CHECKING

from ..constants import BASE_COLOR, DIM_COLOR, KEY_ENTER, Difficulty
from ..scene import Scene
from .widgets import draw_option_list

if TYPE_CHECKING:  # pragma: no cover - imports for type hints only
    from ..renderer import Renderer
    from ..state import GameState

BACK = "Back to Main Menu"


class SettingsScene(Scene):
    """Lets the player pick the puzzle difficulty."""

    def __init__(self, difficulty: Difficulty = Difficulty.NORMAL) -> None:
        super().__init__()
        self.selected = 0
        # Mirrors state.difficulty so rendering never reads the state.
        self.difficulty = difficulty

    @property
    def options(self) -> list[str]:
        return [f"Difficulty: {self.difficulty.name.title()}", BACK]

    def _back(self) -> None:
        from .menu import MainMenuScene

        self.hand_off(MainMenuScene())

    def handle_input(self, key: str, state: GameState) -> None:
        if self.finished:
            return
        count = len(self.options)
        if key in ("w", "W"):
            self.selected = (self.selected - 1) % count
        elif key in ("s", "S"):
            self.selected = (self.selected + 1) % count
        elif key in (KEY_ENTER, " "):
            if self.selected == 0:
                levels = list(Difficulty)
                index = levels.index(state.difficulty)
                state.difficulty = levels[(index + 1) % len(levels)]
                self.difficulty = state.difficulty
            else:
                self._back()
        elif key in ("q", "Q"):
            self._back()

    def update(self, state: GameState) -> None:
        self.difficulty = state.difficulty

    def render(self, renderer: Renderer, opacity: float = 1.0) -> None:
        renderer.draw_text_centered(3, "SETTINGS", renderer.shade(BASE_COLOR, opacity))
        bottom = draw_option_list(
            renderer, self.options, self.selected, "CONFIGURATION", opacity
        )
        renderer.draw_text_centered(
            bottom + 2,
            "W/S: Navigate   ENTER: Select   Q: Back",
            renderer.shade(DIM_COLOR, opacity),
        )

from __future__ import annotations

from typing import TYPE_CHECKING

from ..constants import BASE_COLOR, DIM_COLOR, KEY_ENTER
from ..scene import Scene
from .memory import MemoryReassemblyScene
from .settings import SettingsScene
from .tutorial import TutorialScene
from .widgets import draw_option_list

if TYPE_CHECKING:  # pragma: no cover - imports for type hints only
    from ..renderer import Renderer
    from ..state import GameState

START = "Start Mission"
TUTORIAL = "Tutorial"
SETTINGS = "Settings"
EXIT = "Exit"


class MainMenuScene(Scene):
    """Top-level menu with wraparound selection."""

    options = [START, TUTORIAL, SETTINGS, EXIT]

    def __init__(self) -> None:
        super().__init__()
        self.selected = 0

    def handle_input(self, key: str, state: GameState) -> None:
        if self.finished:
            return
        if key in ("w", "W"):
            self.selected = (self.selected - 1) % len(self.options)
        elif key in ("s", "S"):
            self.selected = (self.selected + 1) % len(self.options)
        elif key in (KEY_ENTER, " "):
            self._select(state)
        elif key in ("q", "Q"):
            if self.options[self.selected] == EXIT:
                state.running = False

    def _select(self, state: GameState) -> None:
        option = self.options[self.selected]
        if option == START:
            self.hand_off(
                MemoryReassemblyScene(difficulty=state.difficulty, rng=state.rng)
            )
        elif option == TUTORIAL:
            self.hand_off(TutorialScene())
        elif option == SETTINGS:
            self.hand_off(SettingsScene(state.difficulty))
        elif option == EXIT:
            state.running = False

    def render(self, renderer: Renderer, opacity: float = 1.0) -> None:
        base = renderer.shade(BASE_COLOR, opacity)
        dim = renderer.shade(DIM_COLOR, opacity)
        renderer.draw_text_centered(3, "NEUROLINK", base)
        renderer.draw_text_centered(4, "MAIN INTERFACE", dim)
        bottom = draw_option_list(
            renderer, self.options, self.selected, "SYSTEM MENU", opacity
        )
        renderer.draw_text_centered(bottom + 2, "W/S: Navigate   ENTER: Select", dim)

        status_y = renderer.height - 6
        renderer.draw_box(2, status_y, 30, 4, "SYSTEM STATUS", dim)
        renderer.draw_text(4, status_y + 1, "Security Level: Normal", dim)
        renderer.draw_text(4, status_y + 2, "Connection: Secure", dim)

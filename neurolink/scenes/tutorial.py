from __future__ import annotations

from typing import TYPE_CHECKING

from ..constants import BASE_COLOR, DIM_COLOR, HIGHLIGHT_COLOR, KEY_ENTER
from ..scene import Scene

if TYPE_CHECKING:  # pragma: no cover - imports for type hints only
    from ..renderer import Renderer
    from ..state import GameState

CONTROLS = [
    "CONTROLS",
    "",
    "W/S/A/D or arrows: Navigate menus and puzzles",
    "ENTER or SPACE: Confirm selections",
    "R: Restart the current puzzle",
    "Q: Return to the previous screen",
]


class TutorialScene(Scene):
    """Static controls reference."""

    def handle_input(self, key: str, state: GameState) -> None:
        if key in (KEY_ENTER, " ", "q", "Q"):
            from .menu import MainMenuScene

            self.hand_off(MainMenuScene())

    def render(self, renderer: Renderer, opacity: float = 1.0) -> None:
        base = renderer.shade(BASE_COLOR, opacity)
        dim = renderer.shade(DIM_COLOR, opacity)
        renderer.draw_text_centered(2, "TUTORIAL", base)

        box_width = 60
        box_height = len(CONTROLS) + 4
        box_x = (renderer.width - box_width) // 2
        box_y = 4
        renderer.draw_box(box_x, box_y, box_width, box_height, color=base)
        for index, line in enumerate(CONTROLS):
            color = renderer.shade(HIGHLIGHT_COLOR, opacity) if index == 0 else dim
            renderer.draw_text(box_x + 3, box_y + 2 + index, line, color)
        renderer.draw_text_centered(
            box_y + box_height + 2, "Press ENTER or Q to return", dim
        )

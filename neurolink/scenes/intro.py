from __future__ import annotations

import math
import time
from typing import TYPE_CHECKING

from ..constants import (
    BASE_COLOR,
    DIM_COLOR,
    INTRO_DURATION,
    KEY_ENTER,
    SELECTED_COLOR,
)
from ..scene import Scene

if TYPE_CHECKING:  # pragma: no cover - imports for type hints only
    from ..renderer import Renderer
    from ..state import GameState

TITLE = "NEUROLINK"
SUBTITLE = "SYSTEM INFILTRATION PROTOCOL"
VERSION = "v1.0.0"
LOADING_WIDTH = 30


class IntroScene(Scene):
    """Title reveal that moves on to the main menu by itself."""

    def __init__(self, duration: float = INTRO_DURATION) -> None:
        super().__init__()
        self.duration = duration
        self.progress = 0.0

    def _to_menu(self) -> None:
        from .menu import MainMenuScene

        self.hand_off(MainMenuScene())

    def handle_input(self, key: str, state: GameState) -> None:
        if key in (" ", KEY_ENTER):
            self._to_menu()

    def update(self, state: GameState) -> None:
        self.progress = min(1.0, self.elapsed / self.duration)
        if self.progress >= 1.0:
            self._to_menu()

    def render(self, renderer: Renderer, opacity: float = 1.0) -> None:
        base = renderer.shade(BASE_COLOR, opacity)
        dim = renderer.shade(DIM_COLOR, opacity)

        visible = min(len(TITLE), int(len(TITLE) * self.progress * 1.5))
        renderer.draw_text_centered(5, TITLE[:visible], base)

        if self.progress > 0.3:
            fade_in = min(1.0, (self.progress - 0.3) / 0.4)
            color = base if opacity * fade_in > 0.5 else dim
            renderer.draw_text_centered(7, SUBTITLE, color)

        if self.progress < 0.9:
            renderer.draw_progress_bar(
                (renderer.width - LOADING_WIDTH) // 2,
                10,
                LOADING_WIDTH,
                self.progress / 0.9,
                base,
                renderer.shade(DIM_COLOR, opacity * 0.5),
            )
            renderer.draw_text_centered(12, "Initializing security protocols...", dim)
        else:
            renderer.draw_text_centered(
                10, "SYSTEM READY", renderer.shade(SELECTED_COLOR, opacity)
            )
            if math.sin(time.monotonic() * 4) > 0:
                renderer.draw_text_centered(12, "Press ENTER to continue", dim)

        renderer.draw_text(2, renderer.height - 2, VERSION, dim)

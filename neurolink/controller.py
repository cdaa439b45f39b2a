from __future__ import annotations

import logging
import time
from typing import Optional

from .constants import (
    FRAME_RATE,
    INPUT_TIMEOUT,
    KEY_CTRL_C,
    TRANSITION_DURATION,
    Color,
)
from .keyboard import InputSource
from .renderer import Renderer
from .scene import Scene
from .state import GameState

logger = logging.getLogger(__name__)


class GameController:
    """Owns the active scene, the shared state and the frame cadence."""

    def __init__(
        self,
        renderer: Renderer | None = None,
        keyboard: InputSource | None = None,
        state: GameState | None = None,
        *,
        frame_rate: int = FRAME_RATE,
        transition_duration: float = TRANSITION_DURATION,
        show_fps: bool = False,
    ) -> None:
        self.renderer = renderer if renderer is not None else Renderer()
        # The keyboard is opened lazily so constructing a controller does not
        # switch the terminal into raw mode.
        self.keyboard = keyboard
        self.state = state if state is not None else GameState()
        self.scene: Optional[Scene] = None
        self.frame_rate = frame_rate
        self.transition_duration = transition_duration
        self.show_fps = show_fps
        self.current_fps = 0.0
        self.last_tick_ms = 0.0
        self._session_start = time.monotonic()

    # --- Game Loop -----------------------------------------------------
    def start(self, scene: Scene | None = None) -> None:
        """Run the main loop from ``scene`` (the intro by default) until quit."""
        if scene is None:
            from .scenes import IntroScene

            scene = IntroScene()
        if self.keyboard is None:
            self.keyboard = InputSource()
        self._session_start = time.monotonic()
        try:
            self.renderer.clear_screen()
            self.renderer.hide_cursor()
            self.transition_to(scene)
            last = time.perf_counter()
            while self.state.running:
                start = time.perf_counter()
                self.tick()
                last = self._sleep(last, start)
        finally:
            self.keyboard.close()
            self.renderer.reset_terminal()
        logger.info(
            "session ended after %.1fs: %d solved, %d failed",
            self.state.time_elapsed,
            self.state.puzzles_solved,
            self.state.failed_attempts,
        )

    def tick(self) -> None:
        """Run one input/update/render/transition cycle."""
        scene = self.scene
        if scene is None:
            logger.warning("no active scene; stopping")
            self.state.running = False
            return

        key = self.keyboard.next_key(INPUT_TIMEOUT) if self.keyboard else None
        if key == KEY_CTRL_C:
            self.state.running = False
            return
        if key is not None:
            scene.handle_input(key, self.state)

        scene.update(self.state)
        self.state.time_elapsed = time.monotonic() - self._session_start

        self.renderer.begin_frame()
        scene.render(self.renderer)
        if self.show_fps:
            self._render_fps()
        self.renderer.end_frame()

        successor = scene.next_scene()
        if successor is not None:
            self.transition_to(successor)

    def transition_to(self, scene: Scene) -> None:
        """Cross-fade from the active scene to ``scene`` and make it active."""
        previous = self.scene

        def render_step(progress: float) -> None:
            if previous is not None:
                previous.render(self.renderer, 1.0 - progress)
            scene.render(self.renderer, progress)

        logger.debug(
            "transition %s -> %s",
            type(previous).__name__ if previous is not None else None,
            type(scene).__name__,
        )
        self.renderer.transition(self.transition_duration, render_step)
        self.scene = scene

    def _render_fps(self) -> None:
        text = f"FPS:{self.current_fps:.1f} ({self.last_tick_ms:.1f}ms)"
        self.renderer.draw_text(
            self.renderer.width - len(text), 0, text, Color.BRIGHT_BLACK
        )

    def _sleep(self, last: float, start: float) -> float:
        """Sleep off whatever is left of the frame budget."""
        current = time.perf_counter()
        self.last_tick_ms = (current - start) * 1000
        self.current_fps = 1 / max(1e-6, current - last)
        sleep = max(0, (1 / self.frame_rate) - (time.perf_counter() - start))
        if sleep > 0:
            time.sleep(sleep)
        return current

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover - imports for type hints only
    from .renderer import Renderer
    from .state import GameState

logger = logging.getLogger(__name__)


class Scene:
    """One screen of the game.

    The controller drives every scene through the same four calls each tick:
    ``handle_input`` (only when a key arrived), ``update``, ``render`` and
    ``next_scene``. Scenes keep their own puzzle state private and talk to the
    rest of the game only through the shared :class:`GameState` and the
    successor they hand off to.
    """

    def __init__(self) -> None:
        # Timers are measured from this wall-clock timestamp, never from ticks.
        self.start_time = time.monotonic()
        self._next: Optional[Scene] = None

    @property
    def elapsed(self) -> float:
        """Seconds since the scene (or its current attempt) started."""
        return time.monotonic() - self.start_time

    def restart_clock(self) -> None:
        self.start_time = time.monotonic()

    @property
    def finished(self) -> bool:
        """True once a successor has been chosen."""
        return self._next is not None

    def hand_off(self, scene: Scene) -> None:
        """Choose the successor. Only the first choice counts."""
        if self._next is None:
            logger.debug(
                "%s hands off to %s", type(self).__name__, type(scene).__name__
            )
            self._next = scene

    # --- Interface ----------------------------------------------------
    def handle_input(self, key: str, state: GameState) -> None:
        """React to a single key press."""

    def update(self, state: GameState) -> None:
        """Advance time-based behaviour; called once per tick."""

    def render(self, renderer: Renderer, opacity: float = 1.0) -> None:
        """Draw the scene. Must not modify game state."""
        raise NotImplementedError

    def next_scene(self) -> Optional[Scene]:
        return self._next

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from .constants import Difficulty, Skill

logger = logging.getLogger(__name__)


@dataclass
class Item:
    """Tool or utility carried in the player's inventory."""

    id: str
    name: str
    description: str
    # ``None`` means the item can be used any number of times
    uses: Optional[int] = None

    def use(self) -> bool:
        """Consume one use. Returns False once the item is spent."""
        if self.uses is None:
            return True
        if self.uses <= 0:
            return False
        self.uses -= 1
        return True


@dataclass
class GameState:
    """Progress shared by every scene for the length of a session.

    Scenes receive this object in ``handle_input`` and ``update`` and only
    ever mutate its fields; the controller owns the single instance.
    """

    running: bool = True
    security_level: int = 0
    skills: Dict[Skill, int] = field(default_factory=lambda: {s: 0 for s in Skill})
    inventory: List[Item] = field(default_factory=list)
    completed_challenges: Set[str] = field(default_factory=set)
    current_location: str = "Entrance"
    # Detection level on a 0.0 - 1.0 scale
    alert_level: float = 0.0
    discovered_locations: Set[str] = field(default_factory=set)
    unlocked_paths: Set[str] = field(default_factory=set)

    # Metrics
    time_elapsed: float = 0.0
    puzzles_solved: int = 0
    failed_attempts: int = 0

    difficulty: Difficulty = Difficulty.NORMAL
    # Source of randomness for puzzle generation; seed it for repeatable runs
    rng: random.Random = field(default_factory=random.Random)

    # --- Helpers ------------------------------------------------------
    def add_skill(self, skill: Skill, amount: int = 1) -> None:
        self.skills[skill] = self.skills.get(skill, 0) + amount

    def raise_alert(self, amount: float) -> None:
        self.alert_level = min(1.0, max(0.0, self.alert_level + amount))

    def lower_alert(self, amount: float) -> None:
        self.raise_alert(-amount)

    def record_solve(self, challenge_id: str, skill: Skill) -> None:
        """Credit a solved puzzle."""
        self.puzzles_solved += 1
        self.add_skill(skill)
        self.completed_challenges.add(challenge_id)
        logger.info(
            "challenge %s solved (%d total, %s=%d)",
            challenge_id,
            self.puzzles_solved,
            skill.value,
            self.skills[skill],
        )

    def record_failure(self, alert: float = 0.0) -> None:
        """Count a failed attempt and raise the alert level by ``alert``."""
        self.failed_attempts += 1
        self.raise_alert(alert)

    def find_item(self, item_id: str) -> Optional[Item]:
        for item in self.inventory:
            if item.id == item_id:
                return item
        return None

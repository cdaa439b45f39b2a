from __future__ import annotations

from .intro import IntroScene
from .menu import MainMenuScene
from .memory import MemoryReassemblyScene
from .settings import SettingsScene
from .tutorial import TutorialScene

__all__ = [
    "IntroScene",
    "MainMenuScene",
    "MemoryReassemblyScene",
    "SettingsScene",
    "TutorialScene",
]

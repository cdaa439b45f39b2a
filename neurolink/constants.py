from enum import Enum

# Fallback terminal size used when the size cannot be queried
# (output redirected to a file or pipe).
DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24

# Target frame rate of the main loop (frames per second)
FRAME_RATE = 60

# How long a single key poll may wait before the tick carries on
INPUT_TIMEOUT = 0.01

# Cross-fade between scenes
TRANSITION_DURATION = 0.3
TRANSITION_STEPS = 20

# Length of the intro reveal in seconds
INTRO_DURATION = 3.0

# Raw escape sequences written to the terminal
ESC = "\x1b"
CLEAR = ESC + "[2J"
HOME = ESC + "[H"
HIDE_CURSOR = ESC + "[?25l"
SHOW_CURSOR = ESC + "[?25h"

# Keys as they arrive in raw mode
KEY_ENTER = "\r"
KEY_ESCAPE = ESC
KEY_CTRL_C = "\x03"

# Box and progress bar glyphs
BOX_TOP_LEFT = "╭"
BOX_TOP_RIGHT = "╮"
BOX_BOTTOM_LEFT = "╰"
BOX_BOTTOM_RIGHT = "╯"
BOX_HORIZONTAL = "─"
BOX_VERTICAL = "│"
BAR_FILLED = "█"
BAR_EMPTY = "░"


class Color(Enum):
    """Logical colour tags. Each value is the SGR sequence it emits."""

    RESET = ESC + "[0m"
    BLACK = ESC + "[30m"
    RED = ESC + "[31m"
    GREEN = ESC + "[32m"
    YELLOW = ESC + "[33m"
    BLUE = ESC + "[34m"
    MAGENTA = ESC + "[35m"
    CYAN = ESC + "[36m"
    WHITE = ESC + "[37m"
    BRIGHT_BLACK = ESC + "[90m"
    BRIGHT_RED = ESC + "[91m"
    BRIGHT_GREEN = ESC + "[92m"
    BRIGHT_YELLOW = ESC + "[93m"
    BRIGHT_BLUE = ESC + "[94m"
    BRIGHT_MAGENTA = ESC + "[95m"
    BRIGHT_CYAN = ESC + "[96m"
    BRIGHT_WHITE = ESC + "[97m"

    @property
    def sequence(self) -> str:
        return self.value


# Bright colours fade to their normal variant first when a scene dims.
DIMMED = {
    Color.BRIGHT_RED: Color.RED,
    Color.BRIGHT_GREEN: Color.GREEN,
    Color.BRIGHT_YELLOW: Color.YELLOW,
    Color.BRIGHT_BLUE: Color.BLUE,
    Color.BRIGHT_MAGENTA: Color.MAGENTA,
    Color.BRIGHT_CYAN: Color.CYAN,
    Color.BRIGHT_WHITE: Color.WHITE,
}


# Palette shared by all scenes
BASE_COLOR = Color.BRIGHT_CYAN
DIM_COLOR = Color.CYAN
SELECTED_COLOR = Color.BRIGHT_WHITE
HIGHLIGHT_COLOR = Color.BRIGHT_YELLOW
SUCCESS_COLOR = Color.BRIGHT_GREEN
DANGER_COLOR = Color.BRIGHT_RED
PICKED_COLOR = Color.BRIGHT_MAGENTA


class Skill(Enum):
    """Skills the player accumulates by solving puzzles."""

    HACKING = "hacking"
    CRYPTOGRAPHY = "cryptography"
    SOCIAL_ENGINEERING = "social_engineering"
    SYSTEMS_KNOWLEDGE = "systems_knowledge"
    TIMING = "timing"


class Difficulty(Enum):
    """Puzzle difficulty levels selectable from the settings screen."""

    EASY = 1
    NORMAL = 2
    HARD = 3

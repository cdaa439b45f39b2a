from __future__ import annotations

from typing import TYPE_CHECKING

from ..constants import BASE_COLOR, DIM_COLOR, SELECTED_COLOR

if TYPE_CHECKING:  # pragma: no cover - imports for type hints only
    from ..renderer import Renderer


def draw_option_list(
    renderer: Renderer,
    options: list[str],
    selected: int,
    title: str,
    opacity: float,
    *,
    box_y: int = 6,
    box_width: int = 40,
) -> int:
    """Draw a boxed list of options with a marker on ``selected``.

    Returns the y coordinate of the row just below the box.
    """
    base = renderer.shade(BASE_COLOR, opacity)
    dim = renderer.shade(DIM_COLOR, opacity)
    highlighted = renderer.shade(SELECTED_COLOR, opacity)
    box_height = len(options) + 4
    box_x = (renderer.width - box_width) // 2
    renderer.draw_box(box_x, box_y, box_width, box_height, title, base)
    for index, option in enumerate(options):
        if index == selected:
            text, color = "▶ " + option, highlighted
        else:
            text, color = "  " + option, dim
        renderer.draw_text(box_x + 4, box_y + 2 + index, text, color)
    return box_y + box_height


def format_clock(seconds: float) -> str:
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"

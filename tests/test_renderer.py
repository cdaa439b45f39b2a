import io

import pytest

from neurolink.constants import (
    BAR_EMPTY,
    BAR_FILLED,
    CLEAR,
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    HOME,
    SHOW_CURSOR,
    Color,
)
from neurolink.renderer import Renderer, restore_terminal


class TtyTerm:
    is_a_tty = True

    def __init__(self, width, height):
        self.width = width
        self.height = height


class BrokenTerm:
    is_a_tty = True

    @property
    def width(self):
        raise OSError("no tty")

    height = 0


def row_text(renderer, y):
    return "".join(renderer.cell(x, y)[0] for x in range(renderer.width))


def test_size_falls_back_when_not_a_tty(renderer):
    assert renderer.size() == (DEFAULT_WIDTH, DEFAULT_HEIGHT)
    assert (renderer.width, renderer.height) == (80, 24)


def test_size_reads_terminal():
    r = Renderer(stream=io.StringIO(), term=TtyTerm(100, 40))
    assert (r.width, r.height) == (100, 40)


def test_size_query_failure_uses_default():
    r = Renderer(stream=io.StringIO(), term=BrokenTerm())
    assert (r.width, r.height) == (DEFAULT_WIDTH, DEFAULT_HEIGHT)


def test_blank_frame_is_all_default(renderer, stream):
    renderer.begin_frame()
    renderer.end_frame()
    out = stream.getvalue()
    rows = (" " * renderer.width for _ in range(renderer.height))
    expected = HOME + Color.RESET.sequence + "\r\n".join(rows) + Color.RESET.sequence
    assert out == expected
    assert renderer.color_switches == 1


def test_blank_frames_are_identical(renderer, stream):
    renderer.begin_frame()
    renderer.end_frame()
    first = stream.getvalue()
    renderer.draw_text(3, 3, "noise", Color.RED)
    renderer.begin_frame()
    renderer.end_frame()
    assert stream.getvalue() == first * 2


def test_begin_frame_discards_previous_drawing(renderer):
    renderer.draw_text(0, 0, "hello", Color.RED)
    renderer.begin_frame()
    assert renderer.cell(0, 0) == (" ", Color.RESET)


def test_draw_text_clips_out_of_bounds(renderer):
    renderer.draw_text(-2, 0, "abcd", Color.GREEN)
    renderer.draw_text(renderer.width - 2, 1, "xyz", Color.GREEN)
    renderer.draw_text(0, -1, "nope")
    renderer.draw_text(0, renderer.height, "nope")
    assert row_text(renderer, 0).startswith("cd ")
    assert row_text(renderer, 1).endswith("xy")
    assert renderer.cell(0, 2) == (" ", Color.RESET)


def test_last_write_wins(renderer):
    renderer.draw_text(5, 3, "first", Color.RED)
    renderer.draw_text(5, 3, "SECOND", Color.BLUE)
    assert row_text(renderer, 3)[5:11] == "SECOND"
    assert renderer.cell(5, 3)[1] is Color.BLUE


def test_none_color_draws_nothing(renderer):
    renderer.draw_text(0, 0, "ghost", None)
    assert row_text(renderer, 0).strip() == ""


@pytest.mark.parametrize("length", [0, 1, 10, 79, 80, 81, 200])
def test_centered_text_stays_in_bounds(renderer, length):
    renderer.draw_text_centered(0, "x" * length, Color.CYAN)
    assert row_text(renderer, 0).count("x") == min(length, renderer.width)
    assert len(renderer._chars[0]) == renderer.width


def test_centered_text_position(renderer):
    renderer.draw_text_centered(4, "abcd")
    assert row_text(renderer, 4).index("abcd") == (80 - 4) // 2


def test_box_with_title(renderer):
    renderer.draw_box(0, 0, 20, 4, "MENU", Color.CYAN)
    top = row_text(renderer, 0)[:20]
    assert top.startswith("╭") and top.endswith("╮")
    assert " MENU " in top
    assert row_text(renderer, 1)[0] == "│" and row_text(renderer, 1)[19] == "│"
    bottom = row_text(renderer, 3)[:20]
    assert bottom == "╰" + "─" * 18 + "╯"


def test_box_title_fits_exactly_between_corners(renderer):
    renderer.draw_box(0, 0, 10, 3, "ABCDEF", Color.CYAN)
    assert row_text(renderer, 0)[:10] == "╭ ABCDEF ╮"


def test_box_title_omitted_when_too_long(renderer):
    renderer.draw_box(0, 0, 8, 3, "VERY LONG TITLE", Color.CYAN)
    assert row_text(renderer, 0)[:8] == "╭" + "─" * 6 + "╮"


@pytest.mark.parametrize("width,height", [(0, 5), (-3, 4), (5, -1), (1, 1), (1, 5)])
def test_degenerate_boxes_do_not_fail(renderer, width, height):
    renderer.draw_box(2, 2, width, height, "T")


def test_box_larger_than_screen_is_clipped(renderer):
    renderer.draw_box(-5, -5, 200, 100, "BIG")
    renderer.end_frame()


@pytest.mark.parametrize(
    "width,progress",
    [(0, 0.5), (10, 0.0), (10, 1.0), (10, 0.33), (7, 0.5), (30, 0.999), (12, -1), (12, 4)],
)
def test_progress_bar_fills_exact_width(renderer, width, progress):
    renderer.draw_progress_bar(0, 0, width, progress)
    row = row_text(renderer, 0)
    filled = row.count(BAR_FILLED)
    empty = row.count(BAR_EMPTY)
    assert filled + empty == width
    clamped = max(0.0, min(1.0, progress))
    assert filled == round(width * clamped)


def test_progress_bar_colours(renderer):
    renderer.draw_progress_bar(0, 0, 4, 0.5, Color.GREEN, Color.BLACK)
    assert renderer.cell(1, 0)[1] is Color.GREEN
    assert renderer.cell(2, 0)[1] is Color.BLACK


def test_uniform_colour_emits_one_escape(renderer):
    for y in range(renderer.height):
        renderer.draw_text(0, y, "#" * renderer.width, Color.BRIGHT_CYAN)
    renderer.end_frame()
    assert renderer.color_switches == 1


def test_colour_escapes_bounded_by_cells(renderer, stream):
    colors = [Color.RED, Color.GREEN]
    for y in range(renderer.height):
        for x in range(renderer.width):
            renderer.draw_text(x, y, "o", colors[(x + y) % 2])
    renderer.end_frame()
    assert renderer.color_switches <= renderer.width * renderer.height
    out = stream.getvalue()
    emitted = out.count(Color.RED.sequence) + out.count(Color.GREEN.sequence)
    assert emitted == renderer.color_switches


def test_colour_only_emitted_on_change(renderer, stream):
    renderer.draw_text(0, 0, "aaa", Color.RED)
    renderer.end_frame()
    assert stream.getvalue().count(Color.RED.sequence) == 1
    # red, then back to reset for the rest of the screen
    assert renderer.color_switches == 2


def test_end_frame_layout(renderer, stream):
    renderer.draw_text(0, 1, "row1")
    renderer.end_frame()
    out = stream.getvalue()
    assert out.startswith(HOME)
    assert out.endswith(Color.RESET.sequence)
    assert out.count("\r\n") == renderer.height - 1


def test_transition_steps(renderer, stream, no_sleep):
    seen = []
    renderer.transition(0.2, seen.append, steps=4)
    assert seen == [0.0, 0.25, 0.5, 0.75, 1.0]
    assert stream.getvalue().count(HOME) == 5
    assert all(0 < s <= 0.05 for s in no_sleep)


def test_transition_frames_start_blank(renderer):
    def step(progress):
        if progress == 0.0:
            renderer.draw_text(0, 0, "old")
        else:
            assert renderer.cell(0, 0) == (" ", Color.RESET)

    renderer.transition(0.0, step, steps=2)


def test_shade_levels():
    assert Renderer.shade(Color.BRIGHT_CYAN, 1.0) is Color.BRIGHT_CYAN
    assert Renderer.shade(Color.BRIGHT_CYAN, 0.5) is Color.CYAN
    assert Renderer.shade(Color.CYAN, 0.5) is Color.CYAN
    assert Renderer.shade(Color.BRIGHT_CYAN, 0.1) is Color.BRIGHT_BLACK
    assert Renderer.shade(Color.BRIGHT_CYAN, 0.0) is None


def test_screen_helpers(renderer, stream):
    renderer.draw_text(0, 0, "x")
    renderer.clear_screen()
    assert renderer.cell(0, 0) == (" ", Color.RESET)
    renderer.hide_cursor()
    renderer.show_cursor()
    renderer.reset_terminal()
    renderer.reset_terminal()
    out = stream.getvalue()
    assert out.startswith(CLEAR + HOME)
    assert out.endswith(Color.RESET.sequence + SHOW_CURSOR + CLEAR + HOME)


def test_restore_terminal_defaults_to_stdout(capsys):
    restore_terminal()
    assert capsys.readouterr().out == Color.RESET.sequence + SHOW_CURSOR + CLEAR + HOME

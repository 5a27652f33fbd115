"""Tests for the blessed terminal host."""

import contextlib

from centerpiece.mode import CenteredMode
from centerpiece.terminal import TerminalInterface


class FakeTerm:
    """Stand-in for blessed.Terminal that renders moves as <row,col> markers."""

    home = ""
    clear = "<clear>"
    normal_cursor = ""
    hide_cursor = ""
    enter_fullscreen = ""
    exit_fullscreen = ""

    def __init__(self, width=80, height=24):
        self.width = width
        self.height = height

    def move(self, y, x):
        return f"<{y},{x}>"

    def cbreak(self):
        return contextlib.nullcontext()


def make_terminal(width=80, height=24):
    return TerminalInterface(terminal=FakeTerm(width, height))


def test_window_width_reads_terminal():
    terminal = make_terminal(width=120)
    assert terminal.window_width == 120
    terminal.term.width = 90
    assert terminal.window_width == 90


def test_margins_set_view_width():
    terminal = make_terminal(width=80)
    assert terminal.view_width == 80

    terminal.apply_window_margins(7, 7)
    assert terminal.left_margin == 7
    assert terminal.view_width == 66

    terminal.reset_window_margins()
    assert terminal.left_margin == 0
    assert terminal.view_width == 80


def test_view_width_never_negative():
    terminal = make_terminal(width=10)
    terminal.apply_window_margins(20, 20)
    assert terminal.view_width == 0


def test_height_grows_when_status_line_hidden():
    terminal = make_terminal(height=24)
    assert terminal.height == 23
    terminal.set_status_line_visible(False)
    assert terminal.height == 24


def test_show_message_requests_redraw():
    terminal = make_terminal()
    terminal.redraw_requested = False
    terminal.show_message("hello")
    assert terminal.message == "hello"
    assert terminal.redraw_requested


def test_update_frame_draws_at_left_margin(capsys):
    terminal = make_terminal(width=80, height=3)
    terminal.apply_window_margins(7, 7)

    terminal.update_frame(["hello", "world"], "status")
    out = capsys.readouterr().out

    assert out.startswith("<clear>")
    assert "<0,7>" + "hello".ljust(66) in out
    assert "<1,7>" + "world".ljust(66) in out
    assert "<2,0>" + "status".ljust(80) in out
    assert terminal.redraw_requested is False


def test_update_frame_clips_long_lines(capsys):
    terminal = make_terminal(width=20, height=2)
    terminal.apply_window_margins(5, 5)
    terminal.update_frame(["x" * 30])
    out = capsys.readouterr().out
    assert "<0,5>" + "x" * 10 + "<" in out


def test_update_frame_only_redraws_changes(capsys):
    terminal = make_terminal(width=80, height=3)
    terminal.update_frame(["one", "two"], "status")
    capsys.readouterr()

    terminal.update_frame(["one", "TWO"], "status")
    out = capsys.readouterr().out
    assert "<clear>" not in out
    assert "<0,0>" not in out
    assert "<1,0>TWO" in out
    assert "status" not in out


def test_margin_change_forces_full_clear(capsys):
    terminal = make_terminal(width=80, height=3)
    terminal.update_frame(["one"], "status")
    capsys.readouterr()

    terminal.apply_window_margins(10, 10)
    terminal.update_frame(["one"], "status")
    out = capsys.readouterr().out
    assert out.startswith("<clear>")
    assert "<0,10>one" in out


def test_invalidate_frame_forces_full_clear(capsys):
    terminal = make_terminal(width=80, height=3)
    terminal.update_frame(["one"], "status")
    capsys.readouterr()

    terminal.invalidate_frame()
    terminal.update_frame(["one"], "status")
    assert capsys.readouterr().out.startswith("<clear>")


def test_hidden_status_line_is_not_drawn(capsys):
    terminal = make_terminal(width=80, height=3)
    terminal.set_status_line_visible(False)
    terminal.update_frame(["a", "b", "c"], "status")
    out = capsys.readouterr().out
    assert "status" not in out
    assert "<2,0>c" in out


def test_centered_mode_on_terminal():
    terminal = make_terminal(width=100)
    mode = CenteredMode(terminal)
    mode.activate()
    assert (terminal.left_margin, terminal.right_margin) == (17, 17)

    terminal.term.width = 80
    terminal.on_window_resize(80)
    assert (terminal.left_margin, terminal.right_margin) == (7, 7)

    mode.deactivate()
    assert terminal.view_width == 80
    assert terminal.status_visible


def test_get_key_without_input_returns_none():
    terminal = make_terminal()
    assert terminal.get_key(timeout=0) is None


def test_message_shown_while_status_line_hidden(capsys):
    terminal = make_terminal(width=20, height=3)
    terminal.set_status_line_visible(False)
    terminal.show_message("bad width")
    terminal.update_frame(["a", "b", "c"], "status")
    out = capsys.readouterr().out
    assert "status" not in out
    assert "<2,0>" + "bad width".ljust(20) in out


def test_body_row_restored_after_message_cleared(capsys):
    terminal = make_terminal(width=20, height=3)
    terminal.set_status_line_visible(False)
    terminal.show_message("bad width")
    terminal.update_frame(["a", "b", "c"])
    capsys.readouterr()

    terminal.message = None
    terminal.update_frame(["a", "b", "c"])
    out = capsys.readouterr().out
    assert "bad width" not in out
    assert "<2,0>" + " " * 20 in out
    assert "<2,0>" + "c".ljust(20) in out

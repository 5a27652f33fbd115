"""Terminal window host using Blessed for display and Curtsies for input."""

import select
import sys
from typing import Optional

import blessed
from curtsies import Input

from .host import WindowHost


class TerminalInterface(WindowHost):
    """Handles terminal I/O using Blessed and acts as the window for centered mode.

    The body column is drawn `left_margin` columns from the left edge and is
    `view_width` columns wide. The last row is the status line unless it has
    been hidden.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        super().__init__()
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[Input] = None
        # Window state driven by centered mode
        self.left_margin = 0
        self.right_margin = 0
        self.status_visible = True
        self.message: Optional[str] = None
        self.redraw_requested = True
        # Virtual screen state for minimal updates
        self._last_lines: list[str] | None = None
        self._last_status: str | None = None
        self._last_left_margin: int | None = None
        self._last_view_width: int | None = None
        # Row a message was drawn over while the status line is hidden
        self._message_row: int | None = None

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen)
        print(self.term.hide_cursor)
        print(self.term.clear)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            # Enter raw mode immediately so reads work
            self._curtsies_input = Input(keynames='curtsies')
            self._curtsies_input.__enter__()

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen)
            print(self.term.normal_cursor)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            finally:
                self._curtsies_input = None

    # WindowHost

    @property
    def window_width(self) -> int:
        return self.term.width

    def apply_window_margins(self, left: int, right: int) -> None:
        self.left_margin = left
        self.right_margin = right

    def reset_window_margins(self) -> None:
        self.left_margin = 0
        self.right_margin = 0

    def set_status_line_visible(self, visible: bool) -> None:
        self.status_visible = bool(visible)

    def request_redraw(self) -> None:
        self.redraw_requested = True

    def show_message(self, text: str) -> None:
        self.message = text
        self.redraw_requested = True

    # Drawing

    @property
    def view_width(self) -> int:
        """Width of the body column between the margins."""
        return max(0, self.window_width - self.left_margin - self.right_margin)

    def invalidate_frame(self) -> None:
        """Invalidate cached frame so next update does a full clear."""
        self._last_lines = None
        self._last_status = None
        self._last_left_margin = None
        self._last_view_width = None
        self._message_row = None

    def _compose_display_line(self, line: str, view_width: int) -> str:
        """Clip or pad a line to exactly the body width."""
        return line[:view_width].ljust(view_width)

    def update_frame(self, lines: list[str], status_text: str = "") -> None:
        """Diff against last frame and write only changes.

        Falls back to a full clear on first paint or when the margins, the
        body width or the number of rows change.
        """
        left_margin = self.left_margin
        view_width = self.view_width
        need_full_clear = (
            self._last_lines is None
            or self._last_left_margin != left_margin
            or self._last_view_width != view_width
            or len(self._last_lines or []) != len(lines)
        )

        if need_full_clear:
            print(self.term.home + self.term.clear, end='')
            self._last_lines = ["" for _ in range(len(lines))]
            self._last_status = None
            self._last_left_margin = left_margin
            self._last_view_width = view_width
            self._message_row = None

        if self._message_row is not None:
            # Wipe the message and repaint the body row under it
            print(self.term.move(self._message_row, 0) + " " * self.term.width, end='')
            if self._message_row < len(self._last_lines):
                self._last_lines[self._message_row] = ""
            self._message_row = None

        for y, line in enumerate(lines):
            new_disp = self._compose_display_line(line, view_width)
            if new_disp != self._last_lines[y]:
                print(self.term.move(y, left_margin) + new_disp, end='')
                self._last_lines[y] = new_disp

        # When hidden the body takes over the status row
        if self.status_visible:
            shown = status_text[:self.term.width].ljust(self.term.width)
            if shown != (self._last_status or ""):
                print(self.term.move(self.term.height - 1, 0) + shown, end='')
                self._last_status = shown
        elif self.message:
            # Diagnostics borrow the bottom row until the message is cleared
            row = self.term.height - 1
            print(self.term.move(row, 0) + self.message[:self.term.width].ljust(self.term.width), end='')
            self._message_row = row

        print('', end='', flush=True)
        self.redraw_requested = False

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name as a string, or None if nothing was read.
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            return str(next(self._curtsies_input))  # blocks
        t = 0.0 if timeout == 0 else float(timeout)
        r, _, _ = select.select([sys.stdin], [], [], t)
        if not r:
            return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Rows available for the body."""
        if self.status_visible:
            return self.term.height - 1  # Reserve one line for status
        return self.term.height

"""Read-only terminal viewer that displays a file in centered mode."""

import logging
import os
import select
import signal
from typing import Optional

from .commands import CommandRegistry
from .config import ModeConfig
from .constants import ModeConstants
from .keyboard import KeyboardHandler, KeyEvent
from .mode import CenteredMode
from .settings_persistence import SettingsPersistence
from .terminal import TerminalInterface

logger = logging.getLogger(__name__)


class Viewer:
    """Main viewer application controller."""

    def __init__(self, config: Optional[ModeConfig] = None,
                 persistence: Optional[SettingsPersistence] = None):
        """Initialize the viewer components."""
        self.terminal = TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.command_registry = CommandRegistry()
        self.persistence = persistence
        self.mode = CenteredMode(self.terminal, config, on_config_changed=self._save_config)
        self.filename: Optional[str] = None
        self.lines: list[str] = []
        self.top_line = 0
        self.running = False
        # Resize signaling pipe, open only while run() is looping
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None

    def load_file(self, filename: str):
        """Load a file for viewing.

        Raises:
            OSError: if the file exists but cannot be read
        """
        self.filename = filename
        try:
            with open(filename, 'r', encoding='utf-8', errors='replace') as f:
                self.lines = f.read().splitlines()
        except FileNotFoundError:
            self.lines = []
            self.terminal.show_message(f"New file: {filename}")
        self.top_line = 0

    def _save_config(self, config: ModeConfig) -> None:
        if self.persistence is not None and self.filename is not None:
            self.persistence.save_config(self.filename, config)

    # Scrolling

    @property
    def page_size(self) -> int:
        # keep one line of context when paging
        return max(1, self.terminal.height - 1)

    def scroll(self, delta: int) -> None:
        last_top = max(0, len(self.lines) - self.terminal.height)
        self.top_line = min(max(0, self.top_line + delta), last_top)

    def visible_lines(self) -> list[str]:
        """Lines of the file on screen, padded with blank rows to the window height."""
        rows = max(0, self.terminal.height)
        shown = self.lines[self.top_line:self.top_line + rows]
        return shown + [""] * (rows - len(shown))

    def status_text(self) -> str:
        name = self.filename or "[no file]"
        if self.mode.active:
            state = f"{self.mode.config.body_width}, margin {self.mode.last_margin}"
        else:
            state = "centered mode off"
        left = f" {name}  ({state})"
        if self.terminal.message:
            left += f"  {self.terminal.message}"
        help_text = "F2 center  F3 status  +/- width  q quit "
        padding = self.terminal.width - len(left) - len(help_text)
        if padding < 1:
            return left
        return left + " " * padding + help_text

    def _draw(self):
        """Draw the current state to the terminal."""
        self.terminal.update_frame(self.visible_lines(), self.status_text())

    # Event handling

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, ModeConstants.RESIZE_PIPE_MARKER)

    def _on_resize(self):
        self.terminal.invalidate_frame()
        self.terminal.on_window_resize(self.terminal.window_width)
        # Keep the view inside the file if the window got taller
        self.scroll(0)
        self.terminal.request_redraw()

    def _handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event."""
        self.terminal.message = None
        self.command_registry.execute(self, key_event)
        self.terminal.request_redraw()

    def run(self):
        """Run the main viewer loop."""
        self.terminal.setup()
        self.running = True
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)

        try:
            with self.terminal.term.cbreak():
                self.mode.activate()

                while self.running:
                    if self.terminal.redraw_requested:
                        self._draw()

                    # Wait for input on stdin or resize pipe
                    ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                    if self._resize_pipe_r in ready:
                        # Clear the pipe
                        os.read(self._resize_pipe_r, 1024)
                        self._on_resize()
                    elif 0 in ready:
                        key_event = self.keyboard.get_key_event(timeout=0)
                        if key_event:
                            self._handle_key_event(key_event)

                self.mode.deactivate()
        except KeyboardInterrupt:
            pass
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self._resize_pipe_r = self._resize_pipe_w = None
            self.terminal.cleanup()

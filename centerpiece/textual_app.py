"""Textual front end: a read-only viewer with centered mode."""

from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, TextArea

from .config import ModeConfig, default_body_width
from .constants import ModeConstants
from .host import WindowHost
from .mode import CenteredMode
from .settings_persistence import SettingsPersistence

BODY_ID = "body"


class TextualHost(WindowHost):
    """WindowHost backed by a Textual app.

    Margins become horizontal padding on the body widget and the Footer
    serves as the status line.
    """

    def __init__(self, app: App):
        super().__init__()
        self.app = app
        self._width: Optional[int] = None

    @property
    def window_width(self) -> int:
        if self._width is not None:
            return self._width
        return self.app.size.width

    def on_window_resize(self, new_width: int) -> None:
        self._width = new_width
        super().on_window_resize(new_width)

    def apply_window_margins(self, left: int, right: int) -> None:
        self.app.query_one(f"#{BODY_ID}").styles.padding = (0, right, 0, left)

    def reset_window_margins(self) -> None:
        self.app.query_one(f"#{BODY_ID}").styles.padding = 0

    def set_status_line_visible(self, visible: bool) -> None:
        self.app.query_one(Footer).display = visible

    def request_redraw(self) -> None:
        self.app.refresh()

    def show_message(self, text: str) -> None:
        self.app.notify(text, severity="warning")


class CenterpieceApp(App):
    """Textual app showing a file in a centered column."""

    CSS = """
    TextArea {
        background: $surface;
        border: none;
        scrollbar-size: 1 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("f2", "toggle_mode", "Center"),
        Binding("f3", "toggle_status_line", "Status line"),
        Binding("plus", "expand", "Wider"),
        Binding("minus", "shrink", "Narrower"),
        Binding("equals_sign", "reset_width", "Reset width", show=False),
    ]

    def __init__(self, filename: Optional[str] = None, config: Optional[ModeConfig] = None,
                 persistence: Optional[SettingsPersistence] = None):
        super().__init__()
        self.filename = filename
        self.config = config or ModeConfig()
        self.persistence = persistence
        self.host: Optional[TextualHost] = None
        self.mode: Optional[CenteredMode] = None

    def _read_text(self) -> str:
        if not self.filename:
            return ""
        try:
            with open(self.filename, 'r', encoding='utf-8', errors='replace') as f:
                return f.read()
        except FileNotFoundError:
            return ""

    def compose(self) -> ComposeResult:
        """Create widgets."""
        yield TextArea(self._read_text(), read_only=True, soft_wrap=True,
                       show_line_numbers=False, id=BODY_ID)
        yield Footer()

    def on_mount(self) -> None:
        self.host = TextualHost(self)
        self.mode = CenteredMode(self.host, self.config, on_config_changed=self._save_config)
        self.mode.activate()
        if self.filename:
            self.sub_title = self.filename
        self.query_one(f"#{BODY_ID}").focus()

    def on_resize(self, event: events.Resize) -> None:
        if self.host is not None:
            self.host.on_window_resize(event.size.width)

    def _save_config(self, config: ModeConfig) -> None:
        self.config = config
        if self.persistence is not None and self.filename:
            self.persistence.save_config(self.filename, config)

    def action_toggle_mode(self) -> None:
        if self.mode.toggle():
            self.notify(ModeConstants.MODE_ON_MESSAGE)
        else:
            self.notify(ModeConstants.MODE_OFF_MESSAGE)

    def action_toggle_status_line(self) -> None:
        self.mode.toggle_status_line()

    def action_expand(self) -> None:
        self.mode.expand()

    def action_shrink(self) -> None:
        self.mode.shrink()

    def action_reset_width(self) -> None:
        self.mode.set_body_width(default_body_width())

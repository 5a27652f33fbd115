"""Interface between centered mode and the program that displays the window."""

from abc import ABC, abstractmethod

from .events import EventBus, WindowEvent


class WindowHost(ABC):
    """A window that centered mode can put margins on.

    Implementations provide the current window width and the calls that
    change what is displayed. They publish RESIZE and FONT_METRICS_CHANGED
    on `events` when those happen.
    """

    def __init__(self):
        self.events = EventBus()

    @property
    @abstractmethod
    def window_width(self) -> int:
        """Current total width of the window in columns."""

    @abstractmethod
    def apply_window_margins(self, left: int, right: int) -> None:
        """Set the left and right margins of the window."""

    @abstractmethod
    def reset_window_margins(self) -> None:
        """Remove the margins and go back to the host default."""

    @abstractmethod
    def set_status_line_visible(self, visible: bool) -> None:
        """Show or hide the status line."""

    @abstractmethod
    def request_redraw(self) -> None:
        """Ask for the window to be drawn again."""

    @abstractmethod
    def show_message(self, text: str) -> None:
        """Show a short diagnostic to the user."""

    def on_window_resize(self, new_width: int) -> None:
        self.events.publish(WindowEvent.RESIZE, new_width)

    def on_font_metrics_changed(self) -> None:
        self.events.publish(WindowEvent.FONT_METRICS_CHANGED)

"""Command pattern implementation for viewer key bindings."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING

from .config import default_body_width
from .constants import ModeConstants
from .keyboard import KeyType

if TYPE_CHECKING:
    from .viewer import Viewer
    from .keyboard import KeyEvent


class ViewerCommand(ABC):
    """Base class for viewer commands."""

    @abstractmethod
    def execute(self, viewer: 'Viewer', key_event: 'KeyEvent') -> None:
        """Execute the command.

        Args:
            viewer: Viewer instance
            key_event: The key event that triggered this command
        """
        pass


class QuitCommand(ViewerCommand):
    def execute(self, viewer, key_event):
        viewer.running = False


class ToggleModeCommand(ViewerCommand):
    def execute(self, viewer, key_event):
        if viewer.mode.toggle():
            viewer.terminal.show_message(ModeConstants.MODE_ON_MESSAGE)
        else:
            viewer.terminal.show_message(ModeConstants.MODE_OFF_MESSAGE)


class ToggleStatusLineCommand(ViewerCommand):
    def execute(self, viewer, key_event):
        viewer.mode.toggle_status_line()


class ExpandCommand(ViewerCommand):
    def execute(self, viewer, key_event):
        viewer.mode.expand()
        viewer.terminal.show_message(f"Body width: {viewer.mode.config.body_width}")


class ShrinkCommand(ViewerCommand):
    def execute(self, viewer, key_event):
        viewer.mode.shrink()
        viewer.terminal.show_message(f"Body width: {viewer.mode.config.body_width}")


class ResetWidthCommand(ViewerCommand):
    def execute(self, viewer, key_event):
        viewer.mode.set_body_width(default_body_width())
        viewer.terminal.show_message(f"Body width: {viewer.mode.config.body_width}")


class ScrollCommand(ViewerCommand):
    """Scroll by a number of lines; pages are counted in screen rows."""

    def __init__(self, lines: int = 0, pages: int = 0):
        self.lines = lines
        self.pages = pages

    def execute(self, viewer, key_event):
        viewer.scroll(self.lines + self.pages * viewer.page_size)


class ScrollToTopCommand(ViewerCommand):
    def execute(self, viewer, key_event):
        viewer.top_line = 0


class ScrollToBottomCommand(ViewerCommand):
    def execute(self, viewer, key_event):
        viewer.scroll(len(viewer.lines))


class CommandRegistry:
    """Registry of key bindings."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], ViewerCommand] = {}
        self._register_default_commands()

    def _register_default_commands(self):
        # System commands
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.REGULAR, 'q'), QuitCommand())

        # Centered mode
        self.register((KeyType.SPECIAL, 'f2'), ToggleModeCommand())
        self.register((KeyType.REGULAR, 'c'), ToggleModeCommand())
        self.register((KeyType.SPECIAL, 'f3'), ToggleStatusLineCommand())
        self.register((KeyType.REGULAR, 's'), ToggleStatusLineCommand())
        self.register((KeyType.REGULAR, '+'), ExpandCommand())
        self.register((KeyType.REGULAR, '-'), ShrinkCommand())
        self.register((KeyType.REGULAR, '='), ResetWidthCommand())

        # Scrolling
        self.register((KeyType.SPECIAL, 'up'), ScrollCommand(lines=-1))
        self.register((KeyType.SPECIAL, 'down'), ScrollCommand(lines=1))
        self.register((KeyType.SPECIAL, 'page_up'), ScrollCommand(pages=-1))
        self.register((KeyType.SPECIAL, 'page_down'), ScrollCommand(pages=1))
        self.register((KeyType.REGULAR, ' '), ScrollCommand(pages=1))
        self.register((KeyType.SPECIAL, 'home'), ScrollToTopCommand())
        self.register((KeyType.SPECIAL, 'end'), ScrollToBottomCommand())

    def register(self, key: Tuple[KeyType, str], command: ViewerCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[ViewerCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, viewer: 'Viewer', key_event: 'KeyEvent') -> bool:
        """Execute the command bound to a key event.

        Returns:
            True if a command was found and run
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command is None:
            return False
        command.execute(viewer, key_event)
        return True

"""Centered mode controller.

CenteredMode ties the margin calculation to a WindowHost: while active it
listens for resize and font metric changes, recomputes the margin from the
current window width and applies it to both sides of the window.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum
from typing import Any, Callable, List, Optional

from .body_width import InvalidSpecError, parse_body_width, step_body_width
from .config import ModeConfig
from .constants import ModeConstants
from .events import Subscription, WindowEvent
from .host import WindowHost
from .margins import compute_margin, margin_pair

logger = logging.getLogger(__name__)


class StatusLineState(Enum):
    SHOWN = "shown"
    HIDDEN = "hidden"


class CenteredMode:
    """Keeps one window's body centered at the configured width."""

    def __init__(self, host: WindowHost, config: Optional[ModeConfig] = None,
                 on_config_changed: Optional[Callable[[ModeConfig], Any]] = None):
        self.host = host
        self._config = config or ModeConfig()
        self.on_config_changed = on_config_changed
        self.status_line = StatusLineState.SHOWN
        self.last_margin: Optional[int] = None
        self._subscriptions: List[Subscription] = []
        # Reported on first activation, when the host can show them
        self._pending_diagnostics = list(self._config.diagnostics)

    @property
    def config(self) -> ModeConfig:
        return self._config

    @property
    def active(self) -> bool:
        return bool(self._subscriptions)

    def _set_config(self, config: ModeConfig) -> None:
        self._config = config
        if self.on_config_changed is not None:
            self.on_config_changed(config)

    # Lifecycle

    def activate(self) -> None:
        """Turn the mode on for the host window."""
        if self.active:
            return
        self._subscriptions = [
            self.host.events.subscribe(WindowEvent.RESIZE, self._on_resize),
            self.host.events.subscribe(WindowEvent.FONT_METRICS_CHANGED, self._on_font_metrics_changed),
        ]
        if self._config.hide_status_line:
            self._enter_status_line(StatusLineState.HIDDEN)
        for diagnostic in self._pending_diagnostics:
            self.host.show_message(diagnostic)
        self._pending_diagnostics = []
        self.recompute()
        logger.debug("centered mode activated")

    def deactivate(self) -> None:
        """Turn the mode off and give the window back its default look."""
        if not self.active:
            return
        for subscription in self._subscriptions:
            subscription.dispose()
        self._subscriptions = []
        self.last_margin = None
        self.host.reset_window_margins()
        self._enter_status_line(StatusLineState.SHOWN)
        logger.debug("centered mode deactivated")

    def toggle(self) -> bool:
        """Activate or deactivate. Returns True if the mode is now active."""
        if self.active:
            self.deactivate()
        else:
            self.activate()
        return self.active

    # Margins

    def _on_resize(self, new_width: Optional[int] = None) -> None:
        del new_width  # the width is read back from the host
        self.recompute()

    def _on_font_metrics_changed(self) -> None:
        self.recompute()

    def recompute(self) -> Optional[int]:
        """Recompute and apply the margins for the current window width.

        Returns the applied margin, or None if the margins were left untouched.
        """
        config = self._config
        margin = compute_margin(config.body_width, self.host.window_width, config.minimum_body_width)
        pair = margin_pair(margin)
        if pair is None:
            self.host.show_message(ModeConstants.INVALID_BODY_WIDTH_MESSAGE)
            return None
        self.host.apply_window_margins(pair.left, pair.right)
        self.host.request_redraw()
        self.last_margin = margin
        return margin

    # Body width commands

    def set_body_width(self, value: Any) -> bool:
        """Set the body width from a raw value such as 72, 0.6 or "0.6".

        An invalid value keeps the current width and shows a diagnostic.
        Returns True if the width was changed.
        """
        try:
            spec = parse_body_width(value)
        except InvalidSpecError as e:
            logger.warning("Rejected body width %r", value)
            self.host.show_message(e.message)
            return False
        self._set_config(self._config.with_body_width(spec))
        if self.active:
            self.recompute()
        return True

    def expand(self, steps: int = 1) -> None:
        self._set_config(self._config.with_body_width(step_body_width(self._config.body_width, steps)))
        if self.active:
            self.recompute()

    def shrink(self, steps: int = 1) -> None:
        self.expand(-steps)

    # Status line

    def _enter_status_line(self, state: StatusLineState) -> None:
        self.status_line = state
        self.host.set_status_line_visible(state is StatusLineState.SHOWN)
        self.host.request_redraw()

    def toggle_status_line(self) -> StatusLineState:
        """Hide the status line if it is shown, show it if it is hidden."""
        if self.status_line is StatusLineState.SHOWN:
            new_state = StatusLineState.HIDDEN
        else:
            new_state = StatusLineState.SHOWN
        self._enter_status_line(new_state)
        self._set_config(replace(self._config, hide_status_line=new_state is StatusLineState.HIDDEN))
        return new_state

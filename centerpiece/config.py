"""Per-window configuration for centered mode.

The host owns one ModeConfig per window or document and passes it to the
mode controller. Configuration changes produce a new ModeConfig rather than
mutating the old one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from .body_width import BodyWidthSpec, Columns, InvalidSpecError, parse_body_width, to_setting
from .constants import ModeConstants

logger = logging.getLogger(__name__)

# Keys used in the per-document settings file
BODY_WIDTH_KEY = "body_width"
MINIMUM_BODY_WIDTH_KEY = "minimum_body_width"
HIDE_STATUS_LINE_KEY = "hide_status_line"


def default_body_width() -> BodyWidthSpec:
    return Columns(ModeConstants.DEFAULT_BODY_WIDTH)


@dataclass(frozen=True)
class ModeConfig:
    """Configuration of centered mode for a single window.

    Raw values are resolved on construction, so ModeConfig(body_width=72)
    holds Columns(72). Invalid values fall back to their defaults and the
    messages are kept in `diagnostics` for the host to show.

    Attributes:
        body_width: Desired body width, absolute or relative to the window
        minimum_body_width: Floor below which the body never shrinks
        hide_status_line: Whether the status line is hidden while the mode is on
    """
    body_width: BodyWidthSpec = field(default_factory=default_body_width)
    minimum_body_width: int = ModeConstants.DEFAULT_MINIMUM_BODY_WIDTH
    hide_status_line: bool = ModeConstants.DEFAULT_HIDE_STATUS_LINE
    diagnostics: Tuple[str, ...] = field(default=(), init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        diagnostics = []
        body_width, diagnostic = resolve_body_width(self.body_width)
        if diagnostic:
            diagnostics.append(diagnostic)
        minimum, diagnostic = resolve_minimum_width(self.minimum_body_width)
        if diagnostic:
            diagnostics.append(diagnostic)
        hide = self.hide_status_line
        if not isinstance(hide, bool):
            logger.warning("Ignoring non-boolean %s setting: %r", HIDE_STATUS_LINE_KEY, hide)
            hide = ModeConstants.DEFAULT_HIDE_STATUS_LINE
        object.__setattr__(self, 'body_width', body_width)
        object.__setattr__(self, 'minimum_body_width', minimum)
        object.__setattr__(self, 'hide_status_line', hide)
        object.__setattr__(self, 'diagnostics', tuple(diagnostics))

    def with_body_width(self, body_width: BodyWidthSpec) -> 'ModeConfig':
        return replace(self, body_width=body_width)

    def to_settings(self) -> Dict[str, Any]:
        """Return a JSON-ready dict for the settings file."""
        return {
            BODY_WIDTH_KEY: to_setting(self.body_width),
            MINIMUM_BODY_WIDTH_KEY: self.minimum_body_width,
            HIDE_STATUS_LINE_KEY: self.hide_status_line,
        }

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> Tuple['ModeConfig', List[str]]:
        """Build a config from a settings dict.

        Missing keys take their defaults. Invalid values also fall back to the
        default, and a diagnostic is returned for each so the caller can show
        it to the user.

        Returns:
            (config, diagnostics)
        """
        def setting(key, default):
            value = settings.get(key)
            return default if value is None else value

        config = cls(
            body_width=setting(BODY_WIDTH_KEY, default_body_width()),
            minimum_body_width=setting(MINIMUM_BODY_WIDTH_KEY, ModeConstants.DEFAULT_MINIMUM_BODY_WIDTH),
            hide_status_line=setting(HIDE_STATUS_LINE_KEY, ModeConstants.DEFAULT_HIDE_STATUS_LINE),
        )
        return config, list(config.diagnostics)


def resolve_body_width(value: Any) -> Tuple[BodyWidthSpec, Optional[str]]:
    """Parse a body width, falling back to the default if it is invalid.

    Returns:
        (spec, diagnostic) where diagnostic is None if the value was valid.
    """
    try:
        return parse_body_width(value), None
    except InvalidSpecError as e:
        logger.warning("Invalid body width %r, using %d columns", value, ModeConstants.DEFAULT_BODY_WIDTH)
        return default_body_width(), e.message


def resolve_minimum_width(value: Any) -> Tuple[int, Optional[str]]:
    """Validate a minimum body width, falling back to the default if it is invalid."""
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            pass
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        logger.warning("Invalid minimum body width %r, using %d", value,
                       ModeConstants.DEFAULT_MINIMUM_BODY_WIDTH)
        return ModeConstants.DEFAULT_MINIMUM_BODY_WIDTH, ModeConstants.INVALID_MINIMUM_WIDTH_MESSAGE
    return value, None

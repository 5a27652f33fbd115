"""Margin calculation for centered mode.

Given the window width, the configured body width and a minimum body width,
compute the symmetric left/right margin that centers the body in the window.
Everything here is pure: the window width is passed in on every call and
nothing is cached.
"""

from __future__ import annotations

import logging
from typing import NamedTuple, Optional, Union

from .body_width import BodyWidthSpec, Columns, Fraction, InvalidSpecError, round2
from .constants import ModeConstants

logger = logging.getLogger(__name__)


class MarginPair(NamedTuple):
    left: int
    right: int


def _even(n: int) -> int:
    """Drop the parity remainder so halves stay symmetric."""
    return n - n % 2


def effective_body_width(spec: BodyWidthSpec, window_width: int,
                         min_width: int = ModeConstants.DEFAULT_MINIMUM_BODY_WIDTH) -> Union[int, float]:
    """Resolve the body width for a window.

    For Columns the result is an int column count: the configured width capped
    at the (even) window width, then floored at the (even) minimum. The minimum
    wins when the two conflict.

    For Fraction the result is a float fraction of the window width, never
    smaller than the fraction the minimum width takes up. Both fractions are
    rounded to two decimals before comparing.

    Raises:
        InvalidSpecError: if `spec` is not a Columns or Fraction.
        ValueError: if `window_width` is negative or `min_width` is below 1.
    """
    if window_width < 0:
        raise ValueError(f"window width must be non-negative, got {window_width}")
    if min_width < 1:
        raise ValueError(f"minimum body width must be at least 1, got {min_width}")

    window_even = _even(window_width)
    min_even = _even(min_width)

    if isinstance(spec, Columns):
        return max(min(spec.n, window_even), min_even)
    if isinstance(spec, Fraction):
        # A window with no usable columns can only be filled entirely
        min_fraction = round2(min_even / window_even) if window_even else 1.0
        width_fraction = round2(min(spec.f, 1.0))
        return max(width_fraction, min_fraction)
    raise InvalidSpecError(spec)


def compute_margin(spec: BodyWidthSpec, window_width: int,
                   min_width: int = ModeConstants.DEFAULT_MINIMUM_BODY_WIDTH) -> Optional[int]:
    """Return the margin to apply on each side, or None if there is nothing to apply.

    None means the body width could not be resolved; the caller should leave
    the current margins alone and tell the user. Halves are rounded with
    Python's round(), i.e. half to even.
    """
    try:
        width = effective_body_width(spec, window_width, min_width)
    except InvalidSpecError as e:
        logger.warning("%s (got %r)", e.message, e.value)
        return None

    if isinstance(spec, Fraction):
        width = width * window_width

    # The minimum may force the body wider than the window
    margin = max(0, round((window_width - width) / 2))
    logger.debug("window %d, body %s -> margin %d", window_width, spec, margin)
    return margin


def margin_pair(margin: Optional[int]) -> Optional[MarginPair]:
    """Return the left/right pair for a margin; None resets to the host default."""
    if margin is None:
        return None
    return MarginPair(margin, margin)

"""Centerpiece - keep text in a centered column of comfortable width."""

from .body_width import Columns, Fraction, BodyWidthSpec, InvalidSpecError, parse_body_width
from .config import ModeConfig
from .margins import effective_body_width, compute_margin, MarginPair
from .mode import CenteredMode, StatusLineState

__all__ = [
    'Columns',
    'Fraction',
    'BodyWidthSpec',
    'InvalidSpecError',
    'parse_body_width',
    'ModeConfig',
    'effective_body_width',
    'compute_margin',
    'MarginPair',
    'CenteredMode',
    'StatusLineState',
]

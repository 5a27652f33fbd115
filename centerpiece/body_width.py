"""Body width specification for centered mode.

A body width is either an absolute number of columns or a fraction of the
window width. The two variants are distinct types so callers can dispatch
on them explicitly instead of guessing from the value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from .constants import ModeConstants


class InvalidSpecError(ValueError):
    """Raised when a body width is neither a column count nor a fraction."""

    def __init__(self, value: Any = None, message: str = ModeConstants.INVALID_BODY_WIDTH_MESSAGE):
        super().__init__(message)
        self.value = value
        self.message = message


@dataclass(frozen=True)
class Columns:
    """Absolute body width in character columns."""
    n: int

    def __post_init__(self) -> None:
        if isinstance(self.n, bool) or not isinstance(self.n, int) or self.n <= 0:
            raise InvalidSpecError(self.n)

    def __str__(self) -> str:
        return f"{self.n} columns"


@dataclass(frozen=True)
class Fraction:
    """Body width as a fraction of the window width, strictly between 0 and 1."""
    f: float

    def __post_init__(self) -> None:
        if isinstance(self.f, bool) or not isinstance(self.f, float):
            raise InvalidSpecError(self.f)
        if not 0.0 < self.f < 1.0:
            raise InvalidSpecError(self.f)

    def __str__(self) -> str:
        return f"{self.f:.0%} of window"


BodyWidthSpec = Union[Columns, Fraction]


def round2(x: float) -> float:
    """Round to the fixed precision used for fraction comparisons."""
    return round(x, ModeConstants.FRACTION_DECIMALS)


def parse_body_width(value: Any) -> BodyWidthSpec:
    """Convert a raw configuration value into a body width spec.

    Integers become Columns and floats become Fraction. Strings are parsed
    the same way, so "66" and "0.6" work from the command line.

    Raises:
        InvalidSpecError: if the value is not a valid column count or fraction.
    """
    if isinstance(value, (Columns, Fraction)):
        return value
    # bool is an int subclass; True is not a width
    if isinstance(value, bool):
        raise InvalidSpecError(value)
    if isinstance(value, int):
        return Columns(value)
    if isinstance(value, float):
        return Fraction(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return Columns(int(text))
        except InvalidSpecError:
            raise
        except ValueError:
            pass  # Not an integer literal; try a fraction
        try:
            f = float(text)
        except ValueError:
            raise InvalidSpecError(value) from None
        return Fraction(f)
    raise InvalidSpecError(value)


def step_body_width(spec: BodyWidthSpec, steps: int) -> BodyWidthSpec:
    """Expand (positive steps) or shrink (negative steps) a body width.

    One step is two columns for Columns and two hundredths for Fraction.
    Columns stay positive and fractions stay inside (0, 1).
    """
    if isinstance(spec, Columns):
        return Columns(max(1, spec.n + steps * ModeConstants.COLUMN_STEP))
    if isinstance(spec, Fraction):
        f = round2(spec.f + steps * ModeConstants.FRACTION_STEP)
        f = min(max(f, ModeConstants.MIN_FRACTION), ModeConstants.MAX_FRACTION)
        return Fraction(f)
    raise InvalidSpecError(spec)


def to_setting(spec: BodyWidthSpec) -> Union[int, float]:
    """Return the JSON-ready value for a body width."""
    if isinstance(spec, Columns):
        return spec.n
    if isinstance(spec, Fraction):
        return spec.f
    raise InvalidSpecError(spec)

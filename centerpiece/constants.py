"""Constants and configuration defaults for centered mode."""

class ModeConstants:
    """Central configuration constants for centered mode."""

    # Body width defaults
    DEFAULT_BODY_WIDTH = 66  # Columns; a comfortable line length for prose
    DEFAULT_MINIMUM_BODY_WIDTH = 40  # Body never shrinks below this
    DEFAULT_HIDE_STATUS_LINE = False

    # Expand/shrink increments
    COLUMN_STEP = 2  # Keeps margins symmetric
    FRACTION_STEP = 0.02
    MIN_FRACTION = 0.01
    MAX_FRACTION = 0.99

    # Precision used when comparing fractional widths
    FRACTION_DECIMALS = 2

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Status messages
    INVALID_BODY_WIDTH_MESSAGE = "body width must be an integer or a fraction between 0 and 1"
    INVALID_MINIMUM_WIDTH_MESSAGE = "minimum body width must be a positive integer"
    MODE_ON_MESSAGE = "Centered mode on"
    MODE_OFF_MESSAGE = "Centered mode off"

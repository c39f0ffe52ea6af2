"""Clock-style duration parsing."""

from ammeta.exceptions import MalformedDurationError


def parse_duration(text: str) -> int:
    """Convert a clock duration like ``3:45`` or ``1:02:03`` to seconds.

    Components are most-significant first and folded left to right as
    ``acc * 60 + component``.

    Args:
        text: Duration text; surrounding whitespace is ignored.

    Returns:
        Total seconds.

    Raises:
        MalformedDurationError: If any component is not a non-negative integer.
    """
    total = 0
    for part in text.strip().split(":"):
        part = part.strip()
        if not (part.isascii() and part.isdigit()):
            raise MalformedDurationError(f"Could not parse duration: {text!r}")
        total = total * 60 + int(part)
    return total

"""Parse ffmpeg clock stamps such as ``00:02:22.86``."""

import logging
import re

logger = logging.getLogger(__name__)

_TIMESTAMP_RE = re.compile(r"([0-9]{2}):([0-9]{2}):([0-9]{2})\.([0-9]{2})")
ZERO_TIMESTAMP = "00:00:00.00"


def _offset_ms(text: str) -> int | None:
    match = _TIMESTAMP_RE.fullmatch(text)
    if not match:
        return None
    hours, minutes, seconds, hundredths = (int(g) for g in match.groups())
    return ((hours * 60 + minutes) * 60 + seconds) * 1000 + hundredths * 10


def parse_timestamp(text: str | None) -> int | None:
    """Return the duration in milliseconds of a ``HH:MM:SS.hh`` stamp.

    Returns None when the text does not have exactly that layout.
    """
    if not isinstance(text, str):
        return None
    value = _offset_ms(text)
    if value is None:
        logger.debug("Failed to parse timestamp: %r", text)
        return None
    # Both stamps are measured from the same origin, so the difference is the duration.
    return value - _offset_ms(ZERO_TIMESTAMP)

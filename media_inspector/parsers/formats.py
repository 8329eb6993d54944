"""Scan ``ffmpeg -formats`` output for the containers the build supports."""

import logging

from media_inspector.media import Container

logger = logging.getLogger(__name__)


def scan_supported_containers(listing: str | None) -> tuple[Container, ...]:
    """Return every known container whose name appears in `listing`.

    The listing is matched as one blob rather than line by line; some builds
    print the whole table on a single line.
    """
    if not listing:
        return ()
    found = tuple(item for item in Container if item.ffmpeg_name in listing)
    logger.debug("Supported containers: %d", len(found))
    return found

"""Probe a batch of files in parallel."""

import logging

from media_inspector.jobs.runner import BatchRunner, BatchSummary, ProbeProgress, ResultFn
from media_inspector.media import MediaInfo
from media_inspector.probers.ffmpeg import FFmpeg

logger = logging.getLogger(__name__)


def probe_files(
    paths: list[str],
    on_result: ResultFn,
    ffmpeg: FFmpeg,
    workers: int = 4,
    progress: ProbeProgress | None = None,
) -> BatchSummary:
    """Probe every path with `ffmpeg` and pass each MediaInfo to `on_result`.

    The binary is checked once; each work item then gets its own instance via
    FFmpeg.spawn(), since one instance refuses overlapping commands.
    """
    if not ffmpeg.load():
        logger.warning("Probe skipped, ffmpeg not available: %s", ffmpeg.binary)
        return BatchSummary(failed=list(paths))

    def worker(path: str) -> MediaInfo | None:
        info = ffmpeg.spawn().get_media_details(path)
        if info is None:
            logger.warning("Could not probe: %s", path)
        return info

    logger.info("Probe starting: %d files, %d workers", len(paths), workers)
    summary = BatchRunner(workers=workers).run(paths, worker, on_result, progress)
    logger.info("Probe complete: %d/%d files", summary.succeeded, len(paths))
    return summary

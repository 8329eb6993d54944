"""Errors raised while running the ffmpeg binary.

The parsers never raise these; they only come from the process layer.
"""


class FFmpegError(Exception):
    """Base class for ffmpeg invocation errors."""


class FFmpegNotLoadedError(FFmpegError):
    """The binary was never found or failed its ``-version`` check."""


class FFmpegAlreadyRunningError(FFmpegError):
    """Another command is still running on the same FFmpeg instance."""

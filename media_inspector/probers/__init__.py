"""Process layer: running ffmpeg and feeding its output to the parsers."""

from media_inspector.probers.ffmpeg import FFmpeg

__all__ = ["FFmpeg"]

"""Extract media metadata from the text printed by ``ffmpeg -i``.

Example input::

    Input #0, mov,mp4,m4a,3gp,3g2,mj2, from 'ExampleVideo.mp4':
      Metadata:
        major_brand     : mp42
      Duration: 00:02:22.86, start: 0.000000, bitrate: 4569 kb/s
        Stream #0:0(eng): Video: h264 (Constrained Baseline) (avc1 / 0x31637661), yuv420p(tv, bt709), 1080x1920, 4499 kb/s, SAR 1:1 DAR 9:16, 19.01 fps, 90k tbr, 90k tbn, 180k tbc (default)
        Stream #0:1(eng): Audio: aac (LC) (mp4a / 0x6134706D), 22050 Hz, mono, fltp, 63 kb/s (default)

The output layout shifts between ffmpeg releases, so every field is optional
and anything unrecognised is left unset instead of raising.
"""

import logging
import re

from media_inspector.media import AudioCodec, Container, MediaInfo, VideoCodec
from media_inspector.parsers.timestamp import parse_timestamp

logger = logging.getLogger(__name__)

# Trailing space or comma keeps codec tags like (mp4a / 0x6134706D) from matching.
RESOLUTION_RE = re.compile(r"[0-9]+x[0-9]+[ ,]")

BITRATE_UNIT = "kb/s"
FRAMERATE_UNIT = "fps"
FREQUENCY_UNIT = "Hz"
DEFAULT_FLAG = "(default)"
MONO = "mono"

_CODEC_FIELD = 3


def _codec_token(tokens: list[str]) -> str:
    return tokens[_CODEC_FIELD].rstrip(",")


def _parse_duration(line: str) -> int | None:
    # Duration: 00:02:22.86, start: 0.000000, bitrate: 4569 kb/s
    tokens = line.split(" ")
    if len(tokens) <= 1:
        return None
    return parse_timestamp(tokens[1].replace(",", ""))


def _parse_video(line: str) -> dict | None:
    # Stream #0:0: Video: h264 (Main), yuv420p, 640x360 [SAR 1:1 DAR 16:9], 25 fps, 25 tbr, 1k tbn, 50 tbc
    tokens = line.split(" ")
    if len(tokens) <= 4:
        return None

    fields = {"video_codec": VideoCodec.from_name(_codec_token(tokens))}

    match = RESOLUTION_RE.search(line)
    if match:
        fields["video_resolution"] = match.group(0).strip().replace(",", "")

    for piece in line.split(","):
        piece = piece.strip()
        if BITRATE_UNIT in piece:
            fields["video_bitrate"] = piece.replace(BITRATE_UNIT, "").strip()
        if FRAMERATE_UNIT in piece:
            fields["video_framerate"] = piece.replace(FRAMERATE_UNIT, "").strip()
    return fields


def _parse_audio(line: str) -> dict | None:
    # Stream #0:1: Audio: aac (LC), 48000 Hz, 5.1, fltp
    tokens = line.split(" ")
    if len(tokens) <= 4:
        return None

    fields = {"audio_codec": AudioCodec.from_name(_codec_token(tokens))}

    for piece in line.split(","):
        piece = piece.strip()
        if FREQUENCY_UNIT in piece:
            fields["audio_sample_rate"] = piece.replace(FREQUENCY_UNIT, "").strip()
        if BITRATE_UNIT in piece:
            bitrate = piece.replace(BITRATE_UNIT, "").strip()
            fields["audio_bitrate"] = bitrate.replace(DEFAULT_FLAG, "").strip()
        if piece == MONO:
            fields["audio_channels"] = 1
    return fields


def extract_media_info(source_file, probe_text: str | None) -> MediaInfo:
    """Build a MediaInfo from ffmpeg's probe output. Never raises on bad text."""
    fields: dict = {"source_file": source_file}
    lines = probe_text.splitlines() if isinstance(probe_text, str) else []

    for raw in lines:
        line = raw.strip()

        if line.startswith("Duration:"):
            duration = _parse_duration(line)
            if duration is not None:
                fields["duration_ms"] = duration

        elif line.startswith("Input"):
            if fields.get("container") is None:
                fields["container"] = Container.find_in(line)

        elif line.startswith("Stream") and "Video:" in line:
            video = _parse_video(line)
            if video:
                fields.update(video)

        elif line.startswith("Stream") and "Audio:" in line:
            audio = _parse_audio(line)
            if audio:
                fields.update(audio)

    info = MediaInfo(**fields)
    logger.debug("Parsed %d lines for %s: %s", len(lines), source_file, info)
    return info

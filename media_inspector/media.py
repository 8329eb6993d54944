"""Container and codec tables plus the MediaInfo record."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class _NamedCodec(Enum):
    """Enum keyed by the codec name ffmpeg prints."""

    @property
    def ffmpeg_name(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str | None):
        """Return the member whose ffmpeg name is exactly `name`, or None."""
        if not name:
            return None
        for item in cls:
            if item.value == name:
                return item
        return None


class VideoCodec(_NamedCodec):
    H264 = "h264"
    HEVC = "hevc"
    MPEG4 = "mpeg4"
    MPEG2 = "mpeg2video"
    MPEG1 = "mpeg1video"
    VP8 = "vp8"
    VP9 = "vp9"
    AV1 = "av1"
    THEORA = "theora"
    FLV1 = "flv1"
    GIF = "gif"


class AudioCodec(_NamedCodec):
    AAC = "aac"
    MP3 = "mp3"
    AC3 = "ac3"
    EAC3 = "eac3"
    OPUS = "opus"
    VORBIS = "vorbis"
    FLAC = "flac"
    ALAC = "alac"
    PCM_S16LE = "pcm_s16le"


class Container(Enum):
    """Container formats, in matching order.

    Matching against an ``Input`` line or a ``-formats`` listing is plain
    substring containment, so order decides ties: MP4 must come before MOV
    (ffmpeg reports ``mov,mp4,m4a,...``) and MKV before WEBM
    (``matroska,webm``).
    """

    FLV = ("flv", "flv", "video/x-flv")
    MKV = ("matroska", "mkv", "video/x-matroska")
    MP4 = ("mp4", "mp4", "video/mp4")
    MP3 = ("mp3", "mp3", "audio/mpeg")
    AVI = ("avi", "avi", "video/x-msvideo")
    MOV = ("mov", "mov", "video/quicktime")
    WEBM = ("webm", "webm", "video/webm")
    OGG = ("ogg", "ogg", "audio/ogg")
    FLAC = ("flac", "flac", "audio/flac")
    WAV = ("wav", "wav", "audio/x-wav")
    GIF = ("gif", "gif", "image/gif")

    def __init__(self, ffmpeg_name: str, extension: str, mime_type: str):
        self.ffmpeg_name = ffmpeg_name
        self.extension = extension
        self.mime_type = mime_type

    @property
    def audio_only(self) -> bool:
        return self.mime_type.startswith("audio/")

    @classmethod
    def from_name(cls, name: str | None) -> "Container | None":
        if not name:
            return None
        for item in cls:
            if item.ffmpeg_name == name:
                return item
        return None

    @classmethod
    def find_in(cls, text: str | None) -> "Container | None":
        """Return the first container whose ffmpeg name appears in `text`."""
        if not text:
            return None
        for item in cls:
            if item.ffmpeg_name in text:
                return item
        return None


def _token(item: Enum | None) -> str | None:
    return item.ffmpeg_name if item is not None else None


@dataclass(frozen=True)
class MediaInfo:
    """Metadata extracted from one ffmpeg probe.

    Bitrate, framerate and sample rate stay as text with their units removed,
    since ffmpeg prints values such as ``19.01`` or ``29.97``.
    """

    source_file: Any
    duration_ms: int = 0
    container: Container | None = None
    video_codec: VideoCodec | None = None
    video_resolution: str | None = None
    video_bitrate: str | None = None
    video_framerate: str | None = None
    audio_codec: AudioCodec | None = None
    audio_sample_rate: str | None = None
    audio_bitrate: str | None = None
    audio_channels: int = 2

    def to_dict(self) -> dict:
        return {
            "source_file": str(self.source_file) if self.source_file is not None else None,
            "duration_ms": self.duration_ms,
            "container": _token(self.container),
            "video": {
                "codec": _token(self.video_codec),
                "resolution": self.video_resolution,
                "bitrate_kbps": self.video_bitrate,
                "framerate": self.video_framerate,
            },
            "audio": {
                "codec": _token(self.audio_codec),
                "sample_rate_hz": self.audio_sample_rate,
                "bitrate_kbps": self.audio_bitrate,
                "channels": self.audio_channels,
            },
        }

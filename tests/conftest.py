"""Shared ffmpeg output samples."""

import pytest

PROBE_OUTPUT = """\
Input #0, mov,mp4,m4a,3gp,3g2,mj2, from 'x.mp4':
  Metadata:
    major_brand     : mp42
    minor_version   : 0
    compatible_brands: isommp42
    creation_time   : 2018-01-02 00:09:32
    com.android.version: 7.1.2
  Duration: 00:02:22.86, start: 0.000000, bitrate: 4569 kb/s
    Stream #0:0(eng): Video: h264 (Constrained Baseline) (avc1 / 0x31637661), yuv420p(tv, bt709), 1080x1920, 4499 kb/s, SAR 1:1 DAR 9:16, 19.01 fps, 90k tbr, 90k tbn, 180k tbc (default)
    Metadata:
      creation_time   : 2018-01-02 00:09:32
      handler_name    : VideoHandle
    Stream #0:1(eng): Audio: aac (LC) (mp4a / 0x6134706D), 22050 Hz, mono, fltp, 63 kb/s (default)
    Metadata:
      creation_time   : 2018-01-02 00:09:32
      handler_name    : SoundHandle
At least one output file must be specified
"""

FORMATS_OUTPUT = """\
File formats:
 D. = Demuxing supported
 .E = Muxing supported
 --
 DE avi             AVI (Audio Video Interleaved)
 D  h264            raw H.264 video
 DE mp3             MP3 (MPEG audio layer 3)
  E mp4             MP4 (MPEG-4 Part 14)
  E ipod            iPod H.264 MP4 (MPEG-4 Part 14)
"""


@pytest.fixture
def probe_output():
    return PROBE_OUTPUT


@pytest.fixture
def formats_output():
    return FORMATS_OUTPUT

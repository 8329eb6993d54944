"""Media Inspector - read media metadata out of ffmpeg's diagnostic text."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("media-inspector")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

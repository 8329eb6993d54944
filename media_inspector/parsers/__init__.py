"""Parsers for the text ffmpeg prints."""

from media_inspector.parsers.formats import scan_supported_containers
from media_inspector.parsers.media_info import extract_media_info
from media_inspector.parsers.timestamp import parse_timestamp

__all__ = ["extract_media_info", "parse_timestamp", "scan_supported_containers"]

"""Run the ffmpeg binary and hand its output to the parsers."""

import logging
import os
import shutil
import subprocess
import threading

from media_inspector.exceptions import FFmpegAlreadyRunningError, FFmpegError, FFmpegNotLoadedError
from media_inspector.media import Container, MediaInfo
from media_inspector.parsers import extract_media_info, scan_supported_containers

logger = logging.getLogger(__name__)


def command_to_string(cmd: list[str]) -> str:
    return " ".join(cmd).strip()


class FFmpeg:
    """One ffmpeg binary, running at most one command at a time.

    Instances share nothing, so callers that need parallel probes create one
    instance per worker.
    """

    def __init__(self, binary: str = "ffmpeg", timeout: float | None = 60):
        self.binary = binary
        self.timeout = timeout
        self._path: str | None = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._path is not None

    @property
    def path(self) -> str | None:
        """Resolved binary path, set by a successful load()."""
        return self._path

    def spawn(self) -> "FFmpeg":
        """Return a new instance for the same binary with its own lock.

        A loaded instance hands its resolved path over, so the copy skips
        the ``-version`` check.
        """
        other = FFmpeg(self.binary, timeout=self.timeout)
        other._path = self._path
        return other

    def load(self) -> bool:
        """Locate the binary and check that it runs. Returns True on success."""
        if self._path is not None:
            return True

        path = shutil.which(self.binary)
        if path is None:
            logger.warning("ffmpeg binary not found: %s", self.binary)
            return False

        try:
            subprocess.run(
                [path, "-version"],
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except (
            subprocess.CalledProcessError,
            subprocess.TimeoutExpired,
            OSError,
            TypeError,
            ValueError,
        ) as e:
            logger.warning("ffmpeg load failed for %s: %s", path, e)
            return False

        logger.debug("ffmpeg load succeeded: %s", path)
        self._path = path
        return True

    def call(self, args: list[str]) -> str:
        """Run ffmpeg with `args` and return stdout and stderr together.

        The exit status is ignored: ``ffmpeg -i file`` with no output file
        always fails, and its diagnostics are exactly what the caller wants.
        """
        if self._path is None:
            raise FFmpegNotLoadedError("Command failed, FFmpeg not initialized")
        if not self._lock.acquire(blocking=False):
            raise FFmpegAlreadyRunningError("Command failed, FFmpeg already running")

        cmd = [self._path, "-hide_banner"] + list(args)
        try:
            logger.debug("Executing command: %s", command_to_string(cmd))
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            raise FFmpegError(f"ffmpeg timed out after {self.timeout}s") from e
        except OSError as e:
            raise FFmpegError(f"ffmpeg could not be started: {e}") from e
        except (TypeError, ValueError) as e:
            raise FFmpegError(f"invalid ffmpeg invocation: {e}") from e
        finally:
            self._lock.release()

        return (result.stdout or "") + (result.stderr or "")

    def probe(self, media_file) -> MediaInfo:
        """Run ``ffmpeg -i`` on `media_file` and parse the result.

        Raises FFmpegError subclasses; see get_media_details for the
        non-raising variant.
        """
        path = os.path.abspath(media_file)
        output = self.call(["-i", path])

        logger.debug("Media details on %s", path)
        for line in output.splitlines():
            logger.debug("%s", line)
        return extract_media_info(media_file, output)

    def supported_containers(self) -> tuple[Container, ...]:
        """Run ``ffmpeg -formats`` and scan it. Raises FFmpegError subclasses."""
        containers = scan_supported_containers(self.call(["-formats"]))
        logger.debug("Supported containers: %d", len(containers))
        for container in containers:
            logger.debug(container.name)
        return containers

    def get_media_details(self, media_file) -> MediaInfo | None:
        """Probe `media_file`, or return None if ffmpeg is unavailable or fails."""
        if not self.loaded:
            return None
        try:
            return self.probe(media_file)
        except FFmpegError as e:
            logger.warning("ffmpeg failed for %s: %s", media_file, e)
            return None

    def get_supported_containers(self) -> tuple[Container, ...] | None:
        if not self.loaded:
            return None
        try:
            return self.supported_containers()
        except FFmpegError as e:
            logger.warning("ffmpeg -formats failed: %s", e)
            return None

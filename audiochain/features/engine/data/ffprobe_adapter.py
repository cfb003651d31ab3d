import subprocess
import logging
from pathlib import Path
from typing import Optional
from audiochain.core.config.settings import settings
from audiochain.core.errors import EngineFailure, IoFailure
from ..domain.interfaces import IDurationProbe

logger = logging.getLogger(__name__)

class FFprobeDurationProbe(IDurationProbe):
    """
    Reads the container duration with ffprobe.
    """

    def __init__(self, binary: Optional[str] = None, timeout: Optional[float] = None):
        self.binary = binary or settings.FFPROBE_BINARY
        self.timeout = timeout if timeout is not None else settings.ENGINE_TIMEOUT_SECONDS

    def duration_of(self, location: Path) -> float:
        cmd = [
            self.binary, "-v", "error",
            "-show_entries", "format=duration",
            "-of", "default=noprint_wrappers=1:nokey=1",
            str(location)
        ]
        logger.debug(f"Probing duration: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, errors="replace", timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            raise EngineFailure("probe", f"timed out after {self.timeout}s") from e
        except OSError as e:
            raise IoFailure(e.errno, f"Could not start ffprobe: {e.strerror}", self.binary) from e

        if result.returncode != 0:
            raise EngineFailure("probe", result.stderr.strip() or f"exit status {result.returncode}", result.returncode)

        try:
            return float(result.stdout.strip())
        except ValueError as e:
            raise EngineFailure("probe", f"unreadable duration {result.stdout.strip()!r} for {location}") from e

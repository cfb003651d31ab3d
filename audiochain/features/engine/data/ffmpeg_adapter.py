import subprocess
import logging
from typing import Optional
from audiochain.core.config.settings import settings
from audiochain.core.errors import IoFailure
from audiochain.features.commands.domain.models import CommandDescriptor
from ..domain.interfaces import IEngineInvoker
from ..domain.models import ExecutionOutcome, Failure, Success

logger = logging.getLogger(__name__)

def stderr_tail(stderr: str, lines: int) -> str:
    """Last non-empty lines of the engine's stderr, where ffmpeg reports the actual cause."""
    kept = [line.strip() for line in (stderr or "").splitlines() if line.strip()]
    return "\n".join(kept[-lines:]) if lines > 0 else ""

class FFmpegInvoker(IEngineInvoker):
    """
    Concrete implementation of IEngineInvoker using the ffmpeg binary.
    Runs synchronously; stdout is discarded, stderr is kept for diagnostics.
    """

    def __init__(self,
                 binary: Optional[str] = None,
                 timeout: Optional[float] = None,
                 tail_lines: Optional[int] = None):
        self.binary = binary or settings.FFMPEG_BINARY
        self.timeout = timeout if timeout is not None else settings.ENGINE_TIMEOUT_SECONDS
        self.tail_lines = tail_lines if tail_lines is not None else settings.STDERR_TAIL_LINES

    def invoke(self, descriptor: CommandDescriptor) -> ExecutionOutcome:
        cmd = descriptor.command_line(self.binary)
        logger.info(f"Executing FFmpeg {descriptor.operation.value}: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.error(f"FFmpeg {descriptor.operation.value} timed out after {self.timeout}s")
            return Failure(f"timed out after {self.timeout}s")
        except OSError as e:
            # Missing binary, permission denied: the engine never ran
            raise IoFailure(e.errno, f"Could not start ffmpeg: {e.strerror}", self.binary) from e

        if result.returncode == 0:
            return Success(descriptor.output)

        if result.returncode < 0:
            diagnostic = f"terminated by signal {-result.returncode}"
        else:
            diagnostic = stderr_tail(result.stderr, self.tail_lines) or f"exit status {result.returncode}"

        logger.error(f"FFmpeg {descriptor.operation.value} Failed (code={result.returncode}). STDERR: {diagnostic}")
        return Failure(diagnostic, result.returncode)

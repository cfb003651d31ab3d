"""audiochain exception hierarchy."""

from typing import Optional


class AudioError(Exception):
    """Base error for audiochain."""


class IoFailure(AudioError, OSError):
    """
    Raised when the backing store or the process table cannot be reached:
    missing input, permission problems, manifest write errors, or an
    engine binary that cannot be spawned.
    """


class InvalidParameter(AudioError, ValueError):
    """Raised when a caller-supplied value violates its documented domain."""


class EngineFailure(AudioError, RuntimeError):
    """Raised when ffmpeg ran but did not terminate successfully."""

    def __init__(self, operation: str, diagnostic: str = "", returncode: Optional[int] = None) -> None:
        message = f"ffmpeg {operation} failed"
        if diagnostic:
            message = f"{message}: {diagnostic}"
        super().__init__(message)
        self.operation = operation
        self.diagnostic = diagnostic
        self.returncode = returncode

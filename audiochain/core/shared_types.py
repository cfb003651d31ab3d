import errno
import math
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Union

from audiochain.core.errors import InvalidParameter, IoFailure

# Durations and positions are accepted as float seconds or timedelta
TimeValue = Union[int, float, timedelta]


def to_seconds(value: TimeValue, name: str = "value") -> float:
    """
    Normalizes a time value to float seconds.
    Rejects negative, NaN and infinite values.
    """
    if isinstance(value, timedelta):
        seconds = value.total_seconds()
    elif isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameter(f"{name} must be seconds or a timedelta, got {type(value).__name__}")
    else:
        seconds = float(value)

    if not math.isfinite(seconds):
        raise InvalidParameter(f"{name} must be finite, got {seconds}")
    if seconds < 0:
        raise InvalidParameter(f"{name} cannot be negative: {seconds}")
    return seconds


def require_positive(value: float, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameter(f"{name} must be a number, got {type(value).__name__}")
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise InvalidParameter(f"{name} must be a positive number, got {value}")
    return value


@dataclass(frozen=True)
class TimeRange:
    """
    Value Object representing a span of the source timeline.
    Enforces that start_seconds is not after end_seconds.
    """
    start_seconds: float
    end_seconds: float

    def __post_init__(self):
        if self.start_seconds < 0 or self.end_seconds < 0:
            raise InvalidParameter("Timestamps cannot be negative.")
        if self.start_seconds > self.end_seconds:
            raise InvalidParameter(
                f"Start time ({self.start_seconds}) must not be after end time ({self.end_seconds})."
            )

    @classmethod
    def of(cls, start: TimeValue, end: TimeValue) -> "TimeRange":
        return cls(to_seconds(start, "start"), to_seconds(end, "end"))

    @property
    def duration(self) -> float:
        return self.end_seconds - self.start_seconds


@dataclass(frozen=True)
class Artifact:
    """
    Immutable handle to a unit of audio content at a filesystem location.
    Operations never edit a location in place; they declare a new one.
    """
    location: Path

    def __post_init__(self):
        if not isinstance(self.location, Path):
            object.__setattr__(self, "location", Path(self.location))
        if str(self.location).strip() in ("", "."):
            raise InvalidParameter("Artifact location cannot be empty.")

    @classmethod
    def ingest(cls, location: Union[str, Path]) -> "Artifact":
        """
        Wraps an existing location.

        Raises:
            IoFailure: if nothing exists at the location.
        """
        artifact = cls(Path(location))
        if not artifact.exists():
            raise IoFailure(errno.ENOENT, "Audio file not found", str(artifact.location))
        return artifact

    def exists(self) -> bool:
        return self.location.exists()

    def __str__(self) -> str:
        return str(self.location)

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, List, Tuple, Union

from audiochain.core.enums import AudioFormat, OperationKind
from audiochain.core.errors import InvalidParameter
from audiochain.core.shared_types import Artifact, TimeRange, TimeValue, require_positive, to_seconds
from audiochain.features.filters.domain.models import Echo, EffectSpec, FadeIn, FadeOut


# --- Operations ---
# Each variant validates its own parameters on construction, so an
# Operation that exists is always buildable.

@dataclass(frozen=True)
class Seek:
    kind: ClassVar[OperationKind] = OperationKind.SEEK
    position: TimeValue

    def __post_init__(self):
        to_seconds(self.position, "seek position")


@dataclass(frozen=True)
class Trim:
    kind: ClassVar[OperationKind] = OperationKind.TRIM
    start: TimeValue
    end: TimeValue

    def __post_init__(self):
        TimeRange.of(self.start, self.end)

    @property
    def time_range(self) -> TimeRange:
        return TimeRange.of(self.start, self.end)


@dataclass(frozen=True)
class Transcode:
    """
    ffmpeg infers the codec from the output extension, so the caller's
    output path must carry an extension of the requested format.
    """
    kind: ClassVar[OperationKind] = OperationKind.TRANSCODE
    format: AudioFormat
    output: Path

    def __post_init__(self):
        if not isinstance(self.format, AudioFormat):
            raise InvalidParameter(f"Unknown audio format: {self.format!r}")
        if not isinstance(self.output, Path):
            object.__setattr__(self, "output", Path(self.output))
        if self.output.suffix.lower() not in self.format.extensions:
            raise InvalidParameter(
                f"Output {self.output} does not match format {self.format.value} "
                f"(expected one of {', '.join(self.format.extensions)})"
            )


@dataclass(frozen=True)
class Gain:
    kind: ClassVar[OperationKind] = OperationKind.GAIN
    factor: float

    def __post_init__(self):
        require_positive(self.factor, "gain factor")


@dataclass(frozen=True)
class Speed:
    kind: ClassVar[OperationKind] = OperationKind.SPEED
    factor: float

    def __post_init__(self):
        require_positive(self.factor, "speed factor")


@dataclass(frozen=True)
class Effect:
    kind: ClassVar[OperationKind] = OperationKind.EFFECT
    effect: EffectSpec

    def __post_init__(self):
        if not isinstance(self.effect, (FadeIn, FadeOut, Echo)):
            raise InvalidParameter(f"Unsupported effect: {self.effect!r}")


@dataclass(frozen=True)
class Reverse:
    kind: ClassVar[OperationKind] = OperationKind.REVERSE


@dataclass(frozen=True)
class Normalize:
    kind: ClassVar[OperationKind] = OperationKind.NORMALIZE


@dataclass(frozen=True)
class Overlay:
    kind: ClassVar[OperationKind] = OperationKind.OVERLAY
    other: Artifact
    start: TimeValue

    def __post_init__(self):
        to_seconds(self.start, "overlay start")


@dataclass(frozen=True)
class Merge:
    kind: ClassVar[OperationKind] = OperationKind.MERGE
    inputs: Tuple[Artifact, ...]
    output: Path

    def __post_init__(self):
        object.__setattr__(self, "inputs", tuple(self.inputs))
        if not self.inputs:
            raise InvalidParameter("Cannot merge an empty list of audio files.")
        if not isinstance(self.output, Path):
            object.__setattr__(self, "output", Path(self.output))


Operation = Union[Seek, Trim, Transcode, Gain, Speed, Effect, Reverse, Normalize, Overlay, Merge]


@dataclass(frozen=True)
class CommandDescriptor:
    """
    A fully built engine invocation.

    args: argument vector without the binary, in ffmpeg's positional order
        (global options, per-input options + -i, filters, output options, output).
    output: the location the engine is asked to write.
    inputs: every location the command reads, in -i order.
    temporaries: planner-owned resources the command references.
    """
    operation: OperationKind
    args: Tuple[str, ...]
    output: Path
    inputs: Tuple[Path, ...] = ()
    temporaries: Tuple[Path, ...] = ()

    def command_line(self, binary: str) -> List[str]:
        return [binary, *self.args]

from enum import Enum, unique
from typing import Tuple


@unique
class OperationKind(str, Enum):
    SEEK = "seek"
    TRIM = "trim"
    TRANSCODE = "transcode"
    GAIN = "gain"
    SPEED = "speed"
    EFFECT = "effect"
    REVERSE = "reverse"
    NORMALIZE = "normalize"
    OVERLAY = "overlay"
    MERGE = "merge"


@unique
class AudioFormat(str, Enum):
    """
    Supported transcoding targets.
    ffmpeg picks the codec from the output extension, so each format
    is defined by the extensions it accepts.
    """
    MP3 = "mp3"
    WAV = "wav"
    FLAC = "flac"
    OGG = "ogg"

    @property
    def extensions(self) -> Tuple[str, ...]:
        if self is AudioFormat.OGG:
            return (".ogg", ".oga")
        return (f".{self.value}",)


@unique
class JobStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

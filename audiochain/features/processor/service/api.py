import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Sequence, Union

from audiochain.core.enums import AudioFormat
from audiochain.core.shared_types import Artifact, TimeValue
from audiochain.features.commands.domain.models import (
    Effect,
    Gain,
    Merge,
    Normalize,
    Operation,
    Overlay,
    Reverse,
    Seek,
    Speed,
    Transcode,
    Trim,
)
from audiochain.features.commands.service.api import CommandBuilder
from audiochain.features.engine.data.ffprobe_adapter import FFprobeDurationProbe
from audiochain.features.engine.domain.interfaces import IDurationProbe
from audiochain.features.engine.service.api import EngineService
from audiochain.features.filters.domain.models import EffectSpec, FadeOut
from audiochain.features.manifest.service.api import plan_manifest
from audiochain.features.storage.service.api import load_audio

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AudioProcessor:
    """
    The current audio content of an editing chain.

    Every operation runs one ffmpeg command and returns a NEW processor
    pointing at the command's output. The receiver is never modified.

    Collaborators are carried along to derived processors:
        builder: turns operations into command descriptors.
        engine: runs descriptors (and journals them, if configured).
        probe: reads clip durations for fade-outs.
    """
    artifact: Artifact
    builder: CommandBuilder = field(default_factory=CommandBuilder, repr=False, compare=False)
    engine: EngineService = field(default_factory=EngineService, repr=False, compare=False)
    probe: IDurationProbe = field(default_factory=FFprobeDurationProbe, repr=False, compare=False)

    @classmethod
    def open(cls, file_path: Union[str, Path], **collaborators) -> "AudioProcessor":
        """
        Creates a processor for an existing audio file.

        Raises:
            IoFailure: If the file does not exist or cannot be read.
        """
        artifact = Artifact.ingest(file_path)
        load_audio(artifact.location)
        logger.info(f"Initializing audio processor for file: {artifact}")
        return cls(artifact, **collaborators)

    @property
    def file_path(self) -> Path:
        return self.artifact.location

    # --- Single-input operations ---

    def seek(self, position: TimeValue) -> "AudioProcessor":
        """Drops everything before `position` (stream copy)."""
        result = self._apply(Seek(position))
        logger.info(f"Seeked {position} into {self.artifact} -> {result.artifact}")
        return result

    def trim(self, start: TimeValue, end: TimeValue) -> "AudioProcessor":
        """Keeps [start, end] of the current audio (stream copy)."""
        result = self._apply(Trim(start, end))
        logger.info(f"Trimmed {self.artifact} from {start} to {end} -> {result.artifact}")
        return result

    def transcode(self, output_format: AudioFormat, output_path: Union[str, Path]) -> None:
        """
        Re-encodes the current audio into `output_path`.
        The codec follows the path's extension, which must match `output_format`.
        """
        descriptor = self.builder.build(Transcode(output_format, Path(output_path)), self.artifact)
        self.engine.run(descriptor)
        logger.info(f"Transcoded {self.artifact} to format {output_format.value} -> {output_path}")

    def adjust_gain(self, factor: float) -> "AudioProcessor":
        result = self._apply(Gain(factor))
        logger.info(f"Adjusted volume of {self.artifact} by factor {factor} -> {result.artifact}")
        return result

    def change_speed(self, factor: float) -> "AudioProcessor":
        """Changes tempo without changing pitch. Any positive factor is accepted."""
        result = self._apply(Speed(factor))
        logger.info(f"Changed speed of {self.artifact} by factor {factor} -> {result.artifact}")
        return result

    def apply_effect(self, effect: EffectSpec) -> "AudioProcessor":
        if isinstance(effect, FadeOut) and effect.clip_duration is None:
            # The fade has to end where the clip ends
            effect = effect.with_clip_duration(self.probe.duration_of(self.artifact.location))
        result = self._apply(Effect(effect))
        logger.info(f"Applied effect {effect} on {self.artifact} -> {result.artifact}")
        return result

    def reverse(self) -> "AudioProcessor":
        result = self._apply(Reverse())
        logger.info(f"Reversed audio {self.artifact} -> {result.artifact}")
        return result

    def normalize(self) -> "AudioProcessor":
        """Loudness normalization (EBU R128 via loudnorm)."""
        result = self._apply(Normalize())
        logger.info(f"Normalized audio {self.artifact} -> {result.artifact}")
        return result

    # --- Multi-input operations ---

    def overlay(self, other: Union["AudioProcessor", Artifact], start_time: TimeValue) -> "AudioProcessor":
        """Mixes `other` onto this audio starting at `start_time`; the result keeps this audio's length."""
        other_artifact = other.artifact if isinstance(other, AudioProcessor) else other
        result = self._apply(Overlay(other_artifact, start_time))
        logger.info(f"Overlayed {other_artifact} onto {self.artifact} at {start_time} -> {result.artifact}")
        return result

    @classmethod
    def merge_sequential(cls,
                         audios: Sequence["AudioProcessor"],
                         output_path: Union[str, Path]) -> "AudioProcessor":
        """
        Concatenates `audios` in order into `output_path` (stream copy).
        The same processor may appear more than once.

        The first processor's collaborators run the merge and are carried
        into the result.

        Raises:
            InvalidParameter: If `audios` is empty.
            EngineFailure: If ffmpeg fails; no partial output is considered valid.
        """
        operation = Merge(tuple(audio.artifact for audio in audios), Path(output_path))
        head = audios[0]

        with plan_manifest(operation.inputs) as manifest:
            descriptor = head.builder.build(operation, manifest=manifest)
            output = head.engine.run(descriptor)

        logger.info(f"Merged {len(audios)} audio files -> {output}")
        return replace(head, artifact=Artifact(output))

    # --- Internals ---

    def _apply(self, operation: Operation) -> "AudioProcessor":
        descriptor = self.builder.build(operation, self.artifact)
        output = self.engine.run(descriptor)
        return replace(self, artifact=Artifact(output))


# --- Path-to-path operations ---

def reverse_audio(input_path: Union[str, Path],
                  output_path: Union[str, Path],
                  builder: Optional[CommandBuilder] = None,
                  engine: Optional[EngineService] = None) -> None:
    """
    Writes `input_path` played backwards to `output_path`.

    Raises:
        IoFailure: If `input_path` does not exist.
        EngineFailure: If ffmpeg fails.
    """
    _run_to_path(Reverse(), input_path, output_path, builder, engine)
    logger.info(f"Reversed audio {input_path} -> {output_path}")


def normalize_volume(input_path: Union[str, Path],
                     output_path: Union[str, Path],
                     builder: Optional[CommandBuilder] = None,
                     engine: Optional[EngineService] = None) -> None:
    """Writes a loudness-normalized copy of `input_path` to `output_path`."""
    _run_to_path(Normalize(), input_path, output_path, builder, engine)
    logger.info(f"Normalized volume of {input_path} -> {output_path}")


def _run_to_path(operation: Operation,
                 input_path: Union[str, Path],
                 output_path: Union[str, Path],
                 builder: Optional[CommandBuilder],
                 engine: Optional[EngineService]) -> Path:
    artifact = Artifact.ingest(input_path)
    descriptor = (builder or CommandBuilder()).build(operation, artifact, output=Path(output_path))
    return (engine or EngineService()).run(descriptor)

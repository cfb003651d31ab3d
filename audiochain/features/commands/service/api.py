import logging
import os
from pathlib import Path
from typing import List, Optional

from audiochain.core.config.settings import settings
from audiochain.core.errors import InvalidParameter
from audiochain.core.shared_types import Artifact, to_seconds
from audiochain.features.filters.data.serializer import format_seconds, render_chain, render_graph
from audiochain.features.filters.domain.models import FilterChain
from audiochain.features.filters.service.api import (
    effect_to_filter,
    gain_filter,
    normalize_filter,
    overlay_graph,
    reverse_filter,
    speed_filters,
)
from ..data.naming import get_namer
from ..domain.interfaces import IOutputNamer
from ..domain.models import (
    CommandDescriptor,
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

logger = logging.getLogger(__name__)

# Global options, always first. Outputs are unconditionally clobbered.
GLOBAL_ARGS = ("-y",)
STREAM_COPY = ("-c", "copy")


def _output_token(location: Path) -> str:
    """
    ffmpeg reads any token starting with '-' as an option, so such relative
    paths are anchored at the current directory: '-an.mp3' -> './-an.mp3'.
    """
    text = str(location)
    if text.startswith("-"):
        return os.path.join(os.curdir, text)
    return text


class CommandBuilder:
    """
    Maps an Operation on a primary artifact to a CommandDescriptor.

    Argument layout follows ffmpeg's positional parsing: options apply to
    the next input or output token, so per-input options sit right before
    their -i, and filters and output options sit before the output path.
    """

    def __init__(self, namer: Optional[IOutputNamer] = None):
        self.namer = namer or get_namer(settings.OUTPUT_NAMING)

    def build(self,
              operation: Operation,
              primary: Optional[Artifact] = None,
              manifest: Optional[Path] = None,
              output: Optional[Path] = None) -> CommandDescriptor:
        """
        Args:
            operation: A validated Operation value.
            primary: The artifact the operation reads. Unused by Merge.
            manifest: The concat manifest, required by Merge only.
            output: Where a derived-output operation writes instead of the
                namer's choice. Transcode and Merge carry their own output.

        Raises:
            InvalidParameter: if the operation is missing a collaborator it needs.
        """
        if isinstance(operation, (Transcode, Merge)) and output is not None:
            raise InvalidParameter(f"{operation.kind.value} takes its output from the operation.")

        if isinstance(operation, Merge):
            if manifest is None:
                raise InvalidParameter("Merge needs a planned manifest.")
            return self._merge(operation, Path(manifest))

        if primary is None:
            raise InvalidParameter(f"{operation.kind.value} needs an input artifact.")

        if isinstance(operation, Transcode):
            return self._transcode(operation, primary)

        if output is None:
            output = self.namer.derive(operation.kind, primary.location)
        output = Path(output)

        if isinstance(operation, Seek):
            return self._seek(operation, primary, output)
        if isinstance(operation, Trim):
            return self._trim(operation, primary, output)
        if isinstance(operation, Overlay):
            return self._overlay(operation, primary, output)
        if isinstance(operation, Gain):
            return self._filtered(operation, primary, output, gain_filter(operation.factor))
        if isinstance(operation, Speed):
            return self._filtered(operation, primary, output, speed_filters(operation.factor))
        if isinstance(operation, Effect):
            return self._filtered(operation, primary, output, effect_to_filter(operation.effect))
        if isinstance(operation, Reverse):
            return self._filtered(operation, primary, output, reverse_filter())
        if isinstance(operation, Normalize):
            return self._filtered(operation, primary, output, normalize_filter())

        raise InvalidParameter(f"Unsupported operation: {operation!r}")

    # --- Stream copy ---

    def _seek(self, op: Seek, primary: Artifact, output: Path) -> CommandDescriptor:
        # -ss before -i: fast, keyframe-aligned input seek
        args = [
            *GLOBAL_ARGS,
            "-ss", format_seconds(to_seconds(op.position)),
            "-i", str(primary.location),
            *STREAM_COPY,
            _output_token(output),
        ]
        return self._descriptor(op, args, output, [primary.location])

    def _trim(self, op: Trim, primary: Artifact, output: Path) -> CommandDescriptor:
        span = op.time_range
        # -copyts keeps source timestamps, so the output -to stays an
        # absolute end position even though the input was seeked
        args = [
            *GLOBAL_ARGS,
            "-copyts",
            "-ss", format_seconds(span.start_seconds),
            "-i", str(primary.location),
            "-to", format_seconds(span.end_seconds),
            *STREAM_COPY,
            _output_token(output),
        ]
        return self._descriptor(op, args, output, [primary.location])

    # --- Re-encode ---

    def _transcode(self, op: Transcode, primary: Artifact) -> CommandDescriptor:
        # No codec flags: the extension of the caller's path selects it
        args = [*GLOBAL_ARGS, "-i", str(primary.location), _output_token(op.output)]
        return self._descriptor(op, args, op.output, [primary.location])

    def _filtered(self, op: Operation, primary: Artifact, output: Path, chain: FilterChain) -> CommandDescriptor:
        args = [
            *GLOBAL_ARGS,
            "-i", str(primary.location),
            "-af", render_chain(chain),
            _output_token(output),
        ]
        return self._descriptor(op, args, output, [primary.location])

    def _overlay(self, op: Overlay, primary: Artifact, output: Path) -> CommandDescriptor:
        # Input order is load-bearing: the graph refers to [0] and [1]
        args = [
            *GLOBAL_ARGS,
            "-i", str(primary.location),
            "-i", str(op.other.location),
            "-filter_complex", render_graph(overlay_graph(op.start)),
            _output_token(output),
        ]
        return self._descriptor(op, args, output, [primary.location, op.other.location])

    # --- Multi-input ---

    def _merge(self, op: Merge, manifest: Path) -> CommandDescriptor:
        args = [
            *GLOBAL_ARGS,
            "-f", "concat",
            "-safe", "0",
            "-i", str(manifest),
            *STREAM_COPY,
            _output_token(op.output),
        ]
        return self._descriptor(
            op, args, op.output,
            [artifact.location for artifact in op.inputs],
            temporaries=[manifest],
        )

    # --- Helpers ---

    def _descriptor(self,
                    op: Operation,
                    args: List[str],
                    output: Path,
                    inputs: List[Path],
                    temporaries: Optional[List[Path]] = None) -> CommandDescriptor:
        descriptor = CommandDescriptor(
            operation=op.kind,
            args=tuple(args),
            output=Path(output),
            inputs=tuple(inputs),
            temporaries=tuple(temporaries or ()),
        )
        logger.debug(f"Built {op.kind.value} command: {' '.join(descriptor.args)}")
        return descriptor

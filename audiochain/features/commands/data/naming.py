import logging
from pathlib import Path
from threading import Lock
from typing import Dict, Set

from audiochain.core.enums import OperationKind
from ..domain.interfaces import IOutputNamer

logger = logging.getLogger(__name__)

PREFIXES: Dict[OperationKind, str] = {
    OperationKind.SEEK: "seeked_",
    OperationKind.TRIM: "trimmed_",
    OperationKind.GAIN: "volume_adjusted_",
    OperationKind.SPEED: "speed_changed_",
    OperationKind.EFFECT: "effected_",
    OperationKind.REVERSE: "reversed_",
    OperationKind.NORMALIZE: "normalized_",
    OperationKind.OVERLAY: "overlayed_",
}


class PrefixNamer(IOutputNamer):
    """
    seeked_song.wav next to song.wav.
    Deterministic: the same operation on the same input always yields
    the same name, and an existing file at that name is overwritten.
    """

    def derive(self, operation: OperationKind, primary: Path) -> Path:
        try:
            prefix = PREFIXES[operation]
        except KeyError:
            raise ValueError(f"Operation {operation.value} takes an explicit output location")
        return primary.with_name(f"{prefix}{primary.name}")


class UniqueNamer(PrefixNamer):
    """
    Like PrefixNamer, but never hands out a name that exists on disk or
    that it already issued: seeked_song.wav, seeked_song_1.wav, ...

    Only names whose files do not exist yet are remembered; once written,
    the disk check covers them.
    """

    def __init__(self):
        self._issued: Set[Path] = set()
        self._lock = Lock()

    def derive(self, operation: OperationKind, primary: Path) -> Path:
        candidate = super().derive(operation, primary)
        stem, suffix = candidate.stem, candidate.suffix

        with self._lock:
            self._issued = {path for path in self._issued if not path.exists()}
            counter = 0
            while candidate in self._issued or candidate.exists():
                counter += 1
                candidate = candidate.with_name(f"{stem}_{counter}{suffix}")
            self._issued.add(candidate)

        if counter:
            logger.debug(f"Output name collision resolved: {primary} -> {candidate}")
        return candidate


def get_namer(policy: str) -> IOutputNamer:
    if policy == "prefix":
        return PrefixNamer()
    if policy == "unique":
        return UniqueNamer()
    raise ValueError(f"Unknown output naming policy: {policy!r} (expected 'prefix' or 'unique')")

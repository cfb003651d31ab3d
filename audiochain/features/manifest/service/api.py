import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Sequence

from audiochain.core.errors import InvalidParameter, IoFailure
from audiochain.core.shared_types import Artifact
from ..data.writer import write_manifest

logger = logging.getLogger(__name__)

MANIFEST_NAME = "concat_list.txt"


@contextmanager
def plan_manifest(artifacts: Sequence[Artifact]) -> Iterator[Path]:
    """
    Scoped concat manifest for a merge.

    Yields the path of a file listing the artifacts in order. The file and
    its private directory are removed when the block exits, whether the
    block returned or raised.

    Raises:
        InvalidParameter: if there is nothing to list.
        IoFailure: if the manifest cannot be written.
    """
    if not artifacts:
        raise InvalidParameter("Cannot plan a manifest for an empty list of audio files.")

    try:
        tmp = tempfile.TemporaryDirectory(prefix="audiochain_")
    except OSError as e:
        raise IoFailure(e.errno, f"Could not create manifest directory: {e.strerror}") from e

    with tmp as tmp_dir:
        manifest = Path(tmp_dir) / MANIFEST_NAME
        try:
            write_manifest(manifest, [artifact.location for artifact in artifacts])
        except OSError as e:
            raise IoFailure(e.errno, f"Could not write merge manifest: {e.strerror}", str(manifest)) from e

        logger.debug(f"Planned manifest {manifest} with {len(artifacts)} entries")
        yield manifest

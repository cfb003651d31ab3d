import logging
from pathlib import Path
from audiochain.core.errors import IoFailure
from ..domain.interfaces import IAudioStore

logger = logging.getLogger(__name__)

PLACEHOLDER_CONTENT = b"dummy audio data"

class LocalAudioStore(IAudioStore):
    def load_audio(self, path: Path) -> None:
        """
        Opens the file once to prove it is readable.
        No decoding happens here; ffmpeg reads the content itself.
        """
        logger.info(f"Loading audio from file: {path}")
        try:
            with open(path, "rb"):
                pass
        except OSError as e:
            raise IoFailure(e.errno, e.strerror or "Cannot open audio file", str(path)) from e

    def save_audio(self, path: Path) -> None:
        """
        Writes fixed placeholder content.
        Not part of the editing pipeline: ffmpeg writes every real output.
        """
        logger.info(f"Saving audio to file: {path}")
        try:
            with open(path, "wb") as f:
                f.write(PLACEHOLDER_CONTENT)
        except OSError as e:
            raise IoFailure(e.errno, e.strerror or "Cannot write audio file", str(path)) from e

from abc import ABC, abstractmethod
from pathlib import Path

class IAudioStore(ABC):
    @abstractmethod
    def load_audio(self, path: Path) -> None:
        """Verifies the audio file at `path` can be opened for reading."""
        pass

    @abstractmethod
    def save_audio(self, path: Path) -> None:
        """Writes a placeholder file at `path`."""
        pass

from pathlib import Path
from typing import Union
from ..data.local_fs import LocalAudioStore

# Singleton Instance for easy import
store = LocalAudioStore()

def load_audio(path: Union[str, Path]) -> None:
    """
    Public Service API: check that an audio file exists and is readable.

    Raises:
        IoFailure: if it is missing or unreadable.
    """
    store.load_audio(Path(path))

def save_audio(path: Union[str, Path]) -> None:
    """Public Service API: write the placeholder audio file."""
    store.save_audio(Path(path))

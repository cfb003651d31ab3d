from abc import ABC, abstractmethod
from pathlib import Path
from audiochain.features.commands.domain.models import CommandDescriptor
from .models import ExecutionOutcome

class IEngineInvoker(ABC):
    """
    Contract for running a built command.
    Abstracts away the process boundary so builders can be tested without ffmpeg.
    """

    @abstractmethod
    def invoke(self, descriptor: CommandDescriptor) -> ExecutionOutcome:
        """
        Runs the descriptor to completion, blocking the caller.

        Returns:
            Success with the descriptor's output on exit status 0, Failure otherwise.

        Raises:
            IoFailure: If the engine process cannot be spawned at all.
        """
        pass

class IDurationProbe(ABC):
    """
    Contract for reading the playing time of an audio file.
    """

    @abstractmethod
    def duration_of(self, location: Path) -> float:
        """Returns the duration in seconds."""
        pass

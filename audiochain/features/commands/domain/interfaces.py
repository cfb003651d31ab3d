from abc import ABC, abstractmethod
from pathlib import Path
from audiochain.core.enums import OperationKind

class IOutputNamer(ABC):
    """
    Contract for naming the output of single-input operations.
    Transcode and Merge never consult it; their output is caller-chosen.
    """

    @abstractmethod
    def derive(self, operation: OperationKind, primary: Path) -> Path:
        """
        Returns the location the operation should write to.

        Args:
            operation: The kind of operation being built.
            primary: Location of the artifact the operation reads.
        """
        pass

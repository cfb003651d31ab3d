from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union


@dataclass(frozen=True)
class Success:
    """The engine exited with status 0 and wrote `output`."""
    output: Path


@dataclass(frozen=True)
class Failure:
    """
    The engine ran but did not succeed.
    returncode is negative for signal termination and None for a timeout.
    """
    diagnostic: str
    returncode: Optional[int] = None


ExecutionOutcome = Union[Success, Failure]

# File: tests/conftest.py

import pytest
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy_utils import database_exists, create_database

# 1. Add project root to path
sys.path.append(os.getcwd())

from audiochain.core.database.base import Base
from audiochain.core.enums import OperationKind
from audiochain.core.jobs.manager import JobManager
from audiochain.features.commands.data.naming import PrefixNamer
from audiochain.features.commands.domain.models import CommandDescriptor
from audiochain.features.commands.service.api import CommandBuilder
from audiochain.features.engine.domain.interfaces import IDurationProbe, IEngineInvoker
from audiochain.features.engine.domain.models import ExecutionOutcome, Failure, Success
from audiochain.features.engine.service.api import EngineService
from audiochain.features.processor.service.api import AudioProcessor


class RecordingInvoker(IEngineInvoker):
    """
    Stands in for ffmpeg.
    Records every descriptor, creates the declared output file on success,
    and fails the operations listed in `failures`.
    """

    def __init__(self):
        self.calls: List[CommandDescriptor] = []
        self.failures: Dict[OperationKind, Failure] = {}
        # Manifest content as seen while the command "ran"
        self.manifests: List[str] = []

    def fail(self, operation: OperationKind, diagnostic: str = "boom", returncode: int = 1) -> None:
        self.failures[operation] = Failure(diagnostic, returncode)

    def invoke(self, descriptor: CommandDescriptor) -> ExecutionOutcome:
        self.calls.append(descriptor)
        for temp in descriptor.temporaries:
            self.manifests.append(Path(temp).read_text(encoding="utf-8"))

        if descriptor.operation in self.failures:
            return self.failures[descriptor.operation]

        descriptor.output.parent.mkdir(parents=True, exist_ok=True)
        descriptor.output.write_bytes(b"fake output")
        return Success(descriptor.output)

    @property
    def last(self) -> Optional[CommandDescriptor]:
        return self.calls[-1] if self.calls else None


class FixedDurationProbe(IDurationProbe):
    def __init__(self, seconds: float = 5.0):
        self.seconds = seconds
        self.probed: List[Path] = []

    def duration_of(self, location: Path) -> float:
        self.probed.append(Path(location))
        return self.seconds


@pytest.fixture
def source_audio(tmp_path) -> Path:
    """A file that stands in for a 5-second stereo recording."""
    p = tmp_path / "song.wav"
    p.write_bytes(b"RIFF....WAVEfmt ")
    return p


@pytest.fixture
def invoker() -> RecordingInvoker:
    return RecordingInvoker()


@pytest.fixture
def probe() -> FixedDurationProbe:
    return FixedDurationProbe(5.0)


@pytest.fixture
def builder() -> CommandBuilder:
    return CommandBuilder(namer=PrefixNamer())


@pytest.fixture
def processor(source_audio, invoker, probe, builder) -> AudioProcessor:
    return AudioProcessor.open(
        source_audio,
        builder=builder,
        engine=EngineService(invoker=invoker),
        probe=probe,
    )


@pytest.fixture
def session_factory(tmp_path):
    """
    A throwaway SQLite database with the journal schema.
    """
    engine = create_engine(f"sqlite:///{tmp_path / 'journal.db'}")
    if not database_exists(engine.url):
        create_database(engine.url)
    Base.metadata.create_all(bind=engine)

    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def journal(session_factory) -> JobManager:
    return JobManager(session_factory=session_factory)

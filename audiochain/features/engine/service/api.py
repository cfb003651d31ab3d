import logging
from pathlib import Path
from typing import Optional

from audiochain.core.errors import EngineFailure, IoFailure
from audiochain.core.jobs.manager import JobManager
from audiochain.features.commands.domain.models import CommandDescriptor
from ..data.ffmpeg_adapter import FFmpegInvoker
from ..domain.interfaces import IEngineInvoker
from ..domain.models import Failure

logger = logging.getLogger(__name__)

class EngineService:
    """
    Facade for the Engine Feature.
    Runs descriptors, turns outcomes into values or errors, and keeps the
    optional edit journal in step with each run.
    """

    def __init__(self, invoker: Optional[IEngineInvoker] = None, journal: Optional[JobManager] = None):
        self.invoker = invoker or FFmpegInvoker()
        self.journal = journal

    def run(self, descriptor: CommandDescriptor) -> Path:
        """
        Executes the descriptor.

        Returns:
            The output location the engine wrote.

        Raises:
            EngineFailure: If the engine reported a non-success termination.
            IoFailure: If the engine could not be started.
        """
        job_id = None
        if self.journal is not None:
            job_id = self.journal.submit_job(
                descriptor.operation, descriptor.inputs, str(descriptor.output), descriptor.args
            )
            self.journal.start_job(job_id)

        try:
            outcome = self.invoker.invoke(descriptor)
        except IoFailure as e:
            if job_id is not None:
                self.journal.fail_job(job_id, str(e))
            raise

        if isinstance(outcome, Failure):
            if job_id is not None:
                self.journal.fail_job(job_id, outcome.diagnostic)
            raise EngineFailure(descriptor.operation.value, outcome.diagnostic, outcome.returncode)

        if job_id is not None:
            self.journal.complete_job(job_id)
        return outcome.output

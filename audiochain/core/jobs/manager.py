# File: audiochain/core/jobs/manager.py

import logging
from uuid import UUID
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence

from sqlalchemy.orm import sessionmaker

from audiochain.core.database.connection import SessionLocal
from audiochain.core.enums import OperationKind, JobStatus
from .models import EditJobModel

logger = logging.getLogger(__name__)

class JobManager:
    """
    The Edit Journal.
    Records every engine invocation an AudioProcessor performs, so the
    derivation chain of any output location can be reconstructed.
    """

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.session_factory = session_factory or SessionLocal

    def submit_job(self,
                   operation: OperationKind,
                   inputs: Iterable[str],
                   output: str,
                   arguments: Sequence[str] = ()) -> UUID:
        """Create a Job Record in PENDING state."""
        with self.session_factory() as db:
            job = EditJobModel(
                operation=operation,
                input_locations=[str(p) for p in inputs],
                output_location=str(output),
                arguments=[str(a) for a in arguments],
            )
            db.add(job)
            db.commit()
            db.refresh(job)
            logger.info(f"Job Submitted: {job.id} [{operation.value}] -> {output}")
            return job.id

    def start_job(self, job_id: UUID) -> None:
        self._transition(job_id, JobStatus.PROCESSING)

    def complete_job(self, job_id: UUID) -> None:
        self._transition(job_id, JobStatus.COMPLETED)

    def fail_job(self, job_id: UUID, error_message: str) -> None:
        self._transition(job_id, JobStatus.FAILED, error_message)

    def get_job(self, job_id: UUID) -> Optional[EditJobModel]:
        with self.session_factory() as db:
            return db.get(EditJobModel, job_id)

    def history_for(self, output_location: str) -> List[EditJobModel]:
        """All recorded attempts at producing the given location, oldest first."""
        with self.session_factory() as db:
            return (
                db.query(EditJobModel)
                .filter(EditJobModel.output_location == str(output_location))
                .order_by(EditJobModel.created_at)
                .all()
            )

    def _transition(self, job_id: UUID, status: JobStatus, error_message: Optional[str] = None) -> None:
        with self.session_factory() as db:
            job = db.get(EditJobModel, job_id)
            if not job:
                raise ValueError(f"Job {job_id} not found.")

            job.status = status
            now = datetime.now(timezone.utc)
            if status == JobStatus.PROCESSING:
                job.started_at = now
            else:
                job.finished_at = now

            if error_message is not None:
                job.error_message = error_message
                logger.error(f"Job {job_id} Failed: {error_message}")
            elif status == JobStatus.COMPLETED:
                logger.info(f"Job {job_id} Completed successfully.")

            db.commit()

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, JSON, Text, Uuid
from audiochain.core.database.base import Base
from audiochain.core.enums import OperationKind, JobStatus

def utc_now():
    return datetime.now(timezone.utc)

class EditJobModel(Base):
    """
    One engine invocation in the derivation chain of an artifact.

    Structure: [input locations] --(operation, argv)--> [output location]
    """
    __tablename__ = "edit_jobs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    operation = Column(SQLEnum(OperationKind), nullable=False)
    status = Column(SQLEnum(JobStatus), default=JobStatus.PENDING, nullable=False, index=True)

    input_locations = Column(JSON, default=list)
    output_location = Column(String, nullable=False, index=True)
    arguments = Column(JSON, default=list)  # argv without the binary

    created_at = Column(DateTime(timezone=True), default=utc_now)
    started_at = Column(DateTime(timezone=True), nullable=True)
    finished_at = Column(DateTime(timezone=True), nullable=True)

    error_message = Column(Text, nullable=True)

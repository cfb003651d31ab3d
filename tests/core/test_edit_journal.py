import uuid
import pytest
from sqlalchemy import text

from audiochain.core.enums import JobStatus, OperationKind
from audiochain.core.jobs.models import EditJobModel


def test_database_connection(session_factory):
    """
    Simple smoke test to ensure the journal database is reachable.
    """
    with session_factory() as db:
        assert db.execute(text("SELECT 1")).scalar() == 1

def test_job_submission_flow(journal, session_factory):
    job_id = journal.submit_job(
        OperationKind.TRIM,
        inputs=["/music/song.wav"],
        output="/music/trimmed_song.wav",
        arguments=["-y", "-ss", "1", "-i", "/music/song.wav"],
    )
    assert job_id is not None

    with session_factory() as db:
        job = db.get(EditJobModel, job_id)
        assert job.status == JobStatus.PENDING
        assert job.operation == OperationKind.TRIM
        assert job.input_locations == ["/music/song.wav"]
        assert job.arguments[:2] == ["-y", "-ss"]
        assert job.started_at is None

def test_job_lifecycle(journal):
    job_id = journal.submit_job(OperationKind.REVERSE, ["a.wav"], "reversed_a.wav")

    journal.start_job(job_id)
    assert journal.get_job(job_id).status == JobStatus.PROCESSING

    journal.complete_job(job_id)
    job = journal.get_job(job_id)
    assert job.status == JobStatus.COMPLETED
    assert job.finished_at is not None
    assert job.error_message is None

def test_failed_job_keeps_message(journal):
    job_id = journal.submit_job(OperationKind.MERGE, ["a.wav", "b.wav"], "out.wav")
    journal.fail_job(job_id, "Impossible to open 'a.wav'")

    job = journal.get_job(job_id)
    assert job.status == JobStatus.FAILED
    assert job.error_message == "Impossible to open 'a.wav'"

def test_history_for_output_is_ordered(journal):
    first = journal.submit_job(OperationKind.GAIN, ["a.wav"], "volume_adjusted_a.wav")
    second = journal.submit_job(OperationKind.GAIN, ["a.wav"], "volume_adjusted_a.wav")
    journal.submit_job(OperationKind.GAIN, ["b.wav"], "volume_adjusted_b.wav")

    assert [job.id for job in journal.history_for("volume_adjusted_a.wav")] == [first, second]

def test_unknown_job_cannot_transition(journal):
    with pytest.raises(ValueError):
        journal.start_job(uuid.uuid4())

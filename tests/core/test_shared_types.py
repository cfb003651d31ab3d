import pytest
from datetime import timedelta
from pathlib import Path

from audiochain.core.errors import InvalidParameter, IoFailure
from audiochain.core.shared_types import Artifact, TimeRange, to_seconds


def test_to_seconds_accepts_numbers_and_timedeltas():
    assert to_seconds(2) == 2.0
    assert to_seconds(timedelta(milliseconds=250)) == 0.25

@pytest.mark.parametrize("value", [-1, float("nan"), float("inf"), "3", True, None])
def test_to_seconds_rejects_invalid_values(value):
    with pytest.raises(InvalidParameter):
        to_seconds(value)

def test_time_range_allows_empty_span():
    assert TimeRange.of(2, 2).duration == 0

def test_time_range_rejects_reversed_span():
    with pytest.raises(InvalidParameter):
        TimeRange.of(4, 1)

def test_artifact_ingest_requires_existing_location(tmp_path):
    with pytest.raises(IoFailure):
        Artifact.ingest(tmp_path / "missing.wav")

def test_artifact_coerces_strings(source_audio):
    artifact = Artifact.ingest(str(source_audio))
    assert artifact.location == source_audio
    assert str(artifact) == str(source_audio)

def test_artifact_is_an_immutable_value(source_audio):
    a, b = Artifact(source_audio), Artifact(str(source_audio))
    assert a == b and hash(a) == hash(b)
    with pytest.raises(AttributeError):
        a.location = Path("other.wav")

def test_artifact_location_cannot_be_empty():
    with pytest.raises(InvalidParameter):
        Artifact("")

import pytest
from pathlib import Path

from audiochain.core.errors import InvalidParameter, IoFailure
from audiochain.core.shared_types import Artifact
from audiochain.features.manifest.data.writer import quote_location, render_manifest
from audiochain.features.manifest.service.api import plan_manifest


def test_render_manifest_lists_inputs_in_order(tmp_path):
    a, b = tmp_path / "a.wav", tmp_path / "b.wav"
    assert render_manifest([a, b, a]) == f"file '{a}'\nfile '{b}'\nfile '{a}'\n"

def test_quotes_inside_paths_are_escaped(tmp_path):
    p = tmp_path / "it's.wav"
    assert quote_location(p) == "'" + str(tmp_path) + "/it'\\''s.wav'"

def test_relative_paths_are_made_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert quote_location(Path("a.wav")) == f"'{tmp_path / 'a.wav'}'"

def test_manifest_is_removed_after_the_block(source_audio):
    song = Artifact.ingest(source_audio)
    with plan_manifest([song, song]) as manifest:
        assert manifest.exists()
        assert manifest.read_text(encoding="utf-8") == f"file '{source_audio}'\n" * 2

    assert not manifest.exists()
    assert not manifest.parent.exists()

def test_manifest_is_removed_when_the_block_raises(source_audio):
    song = Artifact.ingest(source_audio)
    with pytest.raises(RuntimeError):
        with plan_manifest([song]) as manifest:
            raise RuntimeError("engine exploded")

    assert not manifest.exists()

def test_empty_manifest_is_rejected():
    with pytest.raises(InvalidParameter):
        with plan_manifest([]):
            pass

def test_write_failure_is_an_io_failure(source_audio, monkeypatch):
    def broken_write(target, locations):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr("audiochain.features.manifest.service.api.write_manifest", broken_write)

    with pytest.raises(IoFailure):
        with plan_manifest([Artifact.ingest(source_audio)]):
            pass

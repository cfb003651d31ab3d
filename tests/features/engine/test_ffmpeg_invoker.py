import sys
import pytest

from audiochain.core.enums import OperationKind
from audiochain.core.errors import IoFailure
from audiochain.features.commands.domain.models import CommandDescriptor
from audiochain.features.engine.data.ffmpeg_adapter import FFmpegInvoker, stderr_tail
from audiochain.features.engine.domain.models import Failure, Success

# The current interpreter stands in for the engine binary:
# `python -c <script>` lets each test choose the exit behaviour.

def _script(tmp_path, code, operation=OperationKind.TRIM):
    return CommandDescriptor(operation=operation, args=("-c", code), output=tmp_path / "out.wav")


def test_exit_zero_is_success_with_declared_output(tmp_path):
    d = _script(tmp_path, "pass")
    outcome = FFmpegInvoker(binary=sys.executable).invoke(d)
    assert outcome == Success(tmp_path / "out.wav")

def test_nonzero_exit_is_failure_with_stderr_tail(tmp_path):
    code = "import sys; sys.stderr.write('line one\\nInvalid data found\\n'); sys.exit(3)"
    outcome = FFmpegInvoker(binary=sys.executable, tail_lines=1).invoke(_script(tmp_path, code))

    assert isinstance(outcome, Failure)
    assert outcome.returncode == 3
    assert outcome.diagnostic == "Invalid data found"

def test_silent_failure_reports_exit_status(tmp_path):
    outcome = FFmpegInvoker(binary=sys.executable).invoke(_script(tmp_path, "import sys; sys.exit(1)"))
    assert outcome == Failure("exit status 1", 1)

@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
def test_signal_termination_is_failure(tmp_path):
    code = "import os, signal; os.kill(os.getpid(), signal.SIGKILL)"
    outcome = FFmpegInvoker(binary=sys.executable).invoke(_script(tmp_path, code))

    assert isinstance(outcome, Failure)
    assert outcome.returncode == -9
    assert "signal 9" in outcome.diagnostic

def test_timeout_is_failure(tmp_path):
    outcome = FFmpegInvoker(binary=sys.executable, timeout=0.2).invoke(
        _script(tmp_path, "import time; time.sleep(5)")
    )
    assert isinstance(outcome, Failure)
    assert outcome.returncode is None
    assert "timed out" in outcome.diagnostic

def test_missing_binary_is_io_failure_not_engine_failure(tmp_path):
    invoker = FFmpegInvoker(binary=str(tmp_path / "no-such-ffmpeg"))
    with pytest.raises(IoFailure):
        invoker.invoke(_script(tmp_path, "pass"))

def test_stderr_tail_keeps_last_non_empty_lines():
    assert stderr_tail("a\n\nb\nc\n\n", 2) == "b\nc"
    assert stderr_tail("", 5) == ""
    assert stderr_tail("a", 0) == ""


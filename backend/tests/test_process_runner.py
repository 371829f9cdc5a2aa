import asyncio
import sys

import pytest

from mytube.common.errors import ProcessError
from mytube.media.process_runner import ProcessRunner


def test_captures_stdout_and_stderr() -> None:
    script = "import sys; print('hello'); sys.stderr.write('note')"
    result = asyncio.run(ProcessRunner().run(sys.executable, ["-c", script]))
    assert result.stdout.strip() == "hello"
    assert result.stderr == "note"


def test_non_zero_exit_carries_stderr() -> None:
    script = "import sys; sys.stderr.write('boom'); sys.exit(3)"
    with pytest.raises(ProcessError) as excinfo:
        asyncio.run(ProcessRunner().run(sys.executable, ["-c", script]))
    assert str(excinfo.value) == "boom"
    assert excinfo.value.returncode == 3


def test_non_zero_exit_without_stderr_uses_exit_code() -> None:
    with pytest.raises(ProcessError) as excinfo:
        asyncio.run(ProcessRunner().run(sys.executable, ["-c", "raise SystemExit(4)"]))
    assert str(excinfo.value) == f"{sys.executable} exited with code 4"


def test_missing_binary_is_a_process_error() -> None:
    with pytest.raises(ProcessError):
        asyncio.run(ProcessRunner().run("definitely-not-a-real-binary-xyz", []))


def test_timeout_kills_the_process() -> None:
    with pytest.raises(ProcessError) as excinfo:
        asyncio.run(
            ProcessRunner().run(sys.executable, ["-c", "import time; time.sleep(10)"], timeout=0.5)
        )
    assert "timed out" in str(excinfo.value)

"""Tests for formatting, storage and subprocess helpers."""

import asyncio
import os
import subprocess
import sys

import pytest

from framesplit.utils.formatting import format_duration, is_defined
from framesplit.utils.io import calculate_actual_storage_size
from framesplit.utils.subprocess_utils import run_command


class TestFormatting:
    @pytest.mark.parametrize(
        "ms, expected",
        [(0, "00:00"), (999, "00:00"), (1000, "00:01"), (125000, "02:05"), (3_600_000, "60:00")],
    )
    def test_format_duration(self, ms, expected):
        assert format_duration(ms) == expected

    def test_is_defined(self):
        assert is_defined(0)
        assert is_defined("")
        assert not is_defined(None)


class TestStorage:
    def test_sums_existing_files(self, tmp_path):
        a = tmp_path / "a.jpg"
        a.write_bytes(b"\0" * 1024 * 1024)
        b = tmp_path / "b.jpg"
        b.write_bytes(b"\0" * 512 * 1024)
        size = calculate_actual_storage_size([a, str(b), tmp_path / "missing.jpg"])
        assert size == pytest.approx(1.5)

    def test_empty(self):
        assert calculate_actual_storage_size([]) == 0


class TestRunCommand:
    def test_captures_output(self):
        result = asyncio.run(run_command([sys.executable, "-c", "print('hello')"]))
        assert result.returncode == 0
        assert result.stdout.strip() == "hello"

    def test_nonzero_exit_raises(self):
        with pytest.raises(subprocess.CalledProcessError) as exc_info:
            asyncio.run(run_command([sys.executable, "-c", "import sys; sys.exit(3)"]))
        assert exc_info.value.returncode == 3

    def test_nonzero_exit_without_check(self):
        result = asyncio.run(run_command([sys.executable, "-c", "import sys; sys.exit(3)"], check=False))
        assert result.returncode == 3

    def test_timeout_kills_process(self):
        with pytest.raises(subprocess.TimeoutExpired):
            asyncio.run(run_command([sys.executable, "-c", "import time; time.sleep(30)"], timeout=0.5))

    def test_on_spawn_receives_process(self):
        seen = []
        asyncio.run(run_command([sys.executable, "-c", "pass"], on_spawn=seen.append))
        assert len(seen) == 1

    def test_missing_executable(self):
        with pytest.raises(FileNotFoundError):
            asyncio.run(run_command(["definitely-not-a-binary-xyz"]))

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX process probing")
    def test_cancelled_task_kills_child(self):
        spawned = []

        async def scenario():
            task = asyncio.create_task(
                run_command([sys.executable, "-c", "import time; time.sleep(30)"], on_spawn=spawned.append)
            )
            while not spawned:
                await asyncio.sleep(0.01)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(scenario())
        (process,) = spawned
        assert process.returncode is not None
        with pytest.raises(ProcessLookupError):
            os.kill(process.pid, 0)

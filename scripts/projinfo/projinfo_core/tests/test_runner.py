from __future__ import annotations

import subprocess
import sys
import tempfile
import time
import unittest
from pathlib import Path
from unittest import mock

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from projinfo_core.runner import run_command  # noqa: E402


class RunCommandTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.cwd = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def test_empty_working_directory_spawns_nothing(self):
        with mock.patch("projinfo_core.runner.subprocess.run") as run:
            self.assertEqual(run_command(sys.executable, ["-c", "print(1)"], ""), "")
            self.assertEqual(run_command(sys.executable, ["-c", "print(1)"], None), "")
            run.assert_not_called()

    def test_returns_trimmed_stdout(self):
        out = run_command(sys.executable, ["-c", "print('  hello  ')"], self.cwd)
        self.assertEqual(out, "hello")

    def test_string_args_are_split(self):
        out = run_command(sys.executable, "-c \"print('a b')\"", self.cwd)
        self.assertEqual(out, "a b")

    def test_stderr_returned_when_stdout_empty(self):
        code = "import sys; sys.stderr.write(' fatal: nope \\n'); sys.exit(128)"
        self.assertEqual(run_command(sys.executable, ["-c", code], self.cwd), "fatal: nope")

    def test_stdout_wins_over_stderr(self):
        code = "import sys; sys.stderr.write('warn'); print('data')"
        self.assertEqual(run_command(sys.executable, ["-c", code], self.cwd), "data")

    def test_missing_executable_returns_empty(self):
        self.assertEqual(run_command("definitely-not-a-real-tool-xyz", ["--version"], self.cwd), "")

    def test_hanging_command_times_out(self):
        started = time.monotonic()
        out = run_command(sys.executable, ["-c", "import time; time.sleep(30)"], self.cwd, timeout=0.5)
        elapsed = time.monotonic() - started
        self.assertEqual(out, "")
        self.assertLess(elapsed, 5.0)

    def test_timeout_kills_child(self):
        real_popen = subprocess.Popen
        spawned = []

        def tracking_popen(*args, **kwargs):
            proc = real_popen(*args, **kwargs)
            spawned.append(proc)
            return proc

        with mock.patch("subprocess.Popen", side_effect=tracking_popen):
            run_command(sys.executable, ["-c", "import time; time.sleep(30)"], self.cwd, timeout=0.3)
        self.assertEqual(len(spawned), 1)
        self.assertIsNotNone(spawned[0].returncode)


if __name__ == "__main__":
    unittest.main()

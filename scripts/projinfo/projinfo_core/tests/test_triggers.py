from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from projinfo_core.triggers import MANUAL, PROJECT_CHANGED, ProjectWatcher, RefreshTrigger  # noqa: E402


class RefreshTriggerTests(unittest.TestCase):
    def test_fire_delivers_reason(self):
        trigger = RefreshTrigger()
        seen = []
        trigger.subscribe(seen.append)
        self.assertEqual(trigger.fire(), 1)
        self.assertEqual(seen, [MANUAL])

    def test_unsubscribe(self):
        trigger = RefreshTrigger()
        seen = []
        sub_id = trigger.subscribe(seen.append)
        trigger.unsubscribe(sub_id)
        self.assertEqual(trigger.fire("focus"), 0)
        self.assertEqual(seen, [])

    def test_failing_handler_does_not_block_others(self):
        trigger = RefreshTrigger()
        seen = []

        def broken(_reason):
            raise RuntimeError("nope")

        trigger.subscribe(broken)
        trigger.subscribe(seen.append)
        with self.assertLogs("projinfo_core.triggers", level="ERROR"):
            self.assertEqual(trigger.fire("focus"), 1)
        self.assertEqual(seen, ["focus"])


class ProjectWatcherTests(unittest.TestCase):
    def test_fires_on_watched_file_change(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / ".git").mkdir()
            head = root / ".git" / "HEAD"
            head.write_text("ref: refs/heads/main\n")
            trigger = RefreshTrigger()
            seen = []
            trigger.subscribe(seen.append)
            watcher = ProjectWatcher(root, trigger)

            self.assertFalse(watcher.check())
            stat = head.stat()
            os.utime(head, (stat.st_atime, stat.st_mtime + 10))
            self.assertTrue(watcher.check())
            self.assertFalse(watcher.check())
            self.assertEqual(seen, [PROJECT_CHANGED])

    def test_new_file_counts_as_change(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            trigger = RefreshTrigger()
            watcher = ProjectWatcher(root, trigger)
            (root / "pyproject.toml").write_text("[project]\nname = 'x'\n")
            self.assertTrue(watcher.check())


if __name__ == "__main__":
    unittest.main()

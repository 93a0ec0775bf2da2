from __future__ import annotations

import threading
import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from projinfo_core.collectors.packages import PackageRecord, list_installed  # noqa: E402
from projinfo_core.fetcher import AsyncSourceFetcher  # noqa: E402


class GatedSource:
    """Blocks inside the fetch until release() is called."""

    def __init__(self, records=None, error: Exception | None = None):
        self.records = records if records is not None else []
        self.error = error
        self.gate = threading.Event()
        self.calls = 0

    def release(self):
        self.gate.set()

    def __call__(self):
        self.calls += 1
        self.gate.wait(5)
        if self.error is not None:
            raise self.error
        return self.records


class FetcherTests(unittest.TestCase):
    def setUp(self):
        self.fetchers: list[AsyncSourceFetcher] = []

    def tearDown(self):
        for fetcher in self.fetchers:
            fetcher.shutdown()

    def _fetcher(self, source) -> AsyncSourceFetcher:
        fetcher = AsyncSourceFetcher({"packages": source})
        self.fetchers.append(fetcher)
        return fetcher

    def test_at_most_one_in_flight(self):
        source = GatedSource([PackageRecord("rich", "13.7.1")])
        fetcher = self._fetcher(source)
        self.assertTrue(fetcher.start("packages"))
        self.assertFalse(fetcher.start("packages"))
        source.release()
        self.assertTrue(fetcher.wait(5))
        outcome = fetcher.poll()
        self.assertIsNotNone(outcome)
        self.assertEqual(source.calls, 1)

    def test_poll_returns_none_while_pending(self):
        source = GatedSource()
        fetcher = self._fetcher(source)
        fetcher.start("packages")
        self.assertIsNone(fetcher.poll())
        self.assertTrue(fetcher.is_pending("packages"))
        source.release()

    def test_success_builds_ordered_facts_and_clears_handle(self):
        source = GatedSource([PackageRecord("b-pkg", "2.0"), PackageRecord("a-pkg", "1.0")])
        fetcher = self._fetcher(source)
        fetcher.start("packages")
        source.release()
        fetcher.wait(5)
        outcome = fetcher.poll()
        self.assertTrue(outcome.ok)
        self.assertEqual([(f.key, f.value) for f in outcome.facts], [("b-pkg", "2.0"), ("a-pkg", "1.0")])
        self.assertFalse(fetcher.is_pending("packages"))
        self.assertIsNone(fetcher.poll())
        self.assertTrue(fetcher.start("packages"))
        fetcher.wait(5)

    def test_failure_returns_error_and_clears_handle(self):
        source = GatedSource(error=RuntimeError("registry offline"))
        fetcher = self._fetcher(source)
        fetcher.start("packages")
        source.release()
        fetcher.wait(5)
        with self.assertLogs("projinfo_core.fetcher", level="WARNING"):
            outcome = fetcher.poll()
        self.assertFalse(outcome.ok)
        self.assertIn("registry offline", outcome.error)
        self.assertFalse(fetcher.is_pending("packages"))

    def test_malformed_records_are_a_failure(self):
        source = GatedSource(records=[object()])
        fetcher = self._fetcher(source)
        fetcher.start("packages")
        source.release()
        fetcher.wait(5)
        with self.assertLogs("projinfo_core.fetcher", level="WARNING"):
            outcome = fetcher.poll()
        self.assertFalse(outcome.ok)

    def test_unknown_source_is_not_started(self):
        fetcher = self._fetcher(GatedSource())
        with self.assertLogs("projinfo_core.fetcher", level="WARNING"):
            self.assertFalse(fetcher.start("nope"))
        self.assertFalse(fetcher.is_pending("nope"))
        self.assertIsNone(fetcher.poll())

    def test_wait_without_pending_returns_false(self):
        fetcher = self._fetcher(GatedSource())
        self.assertFalse(fetcher.wait(0.01))

    def test_shutdown_discards_pending(self):
        source = GatedSource()
        fetcher = self._fetcher(source)
        fetcher.start("packages")
        fetcher.shutdown()
        self.assertFalse(fetcher.is_pending("packages"))
        self.assertIsNone(fetcher.poll())
        source.release()


class PackageSourceTests(unittest.TestCase):
    def test_list_installed_is_sorted_and_unique(self):
        records = list_installed()
        names = [r.name.lower() for r in records]
        self.assertEqual(names, sorted(names))
        self.assertEqual(len(names), len(set(names)))
        self.assertIn("rich", names)


if __name__ == "__main__":
    unittest.main()

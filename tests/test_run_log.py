from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from yt_community.run_log import RunLogger


def _records(path: Path) -> list[dict[str, object]]:
    return [
        json.loads(line)
        for line in path.read_text(encoding="utf-8").splitlines()
        if line.strip()
    ]


class TestRunLogger(unittest.TestCase):
    def test_writes_one_json_object_per_line(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "logs" / "run.log"
            with RunLogger.open(path, session_id="s1") as log:
                log.info("page_fetched", url=" https://example.com ", chars=10)
                log.warning("community_tab_fallback", index=0)

            records = _records(path)

        self.assertEqual([r["event"] for r in records], ["page_fetched", "community_tab_fallback"])
        self.assertEqual(records[0]["url"], "https://example.com")
        self.assertEqual(records[0]["data"], {"chars": 10})
        self.assertEqual(records[1]["level"], "WARN")
        self.assertNotIn("url", records[1])
        self.assertTrue(all(r["session_id"] == "s1" for r in records))

    def test_exception_records_type_and_traceback(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "run.log"
            with RunLogger.open(path) as log:
                try:
                    raise ValueError("boom")
                except ValueError as e:
                    log.exception("command_failed", exc=e)

            record = _records(path)[0]

        self.assertEqual(record["level"], "ERROR")
        error = record["data"]["error"]  # type: ignore[index]
        self.assertEqual(error["type"], "ValueError")
        self.assertEqual(error["message"], "boom")
        self.assertIn("Traceback", error["traceback"])

    def test_appends_by_default_and_overwrites_on_request(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "run.log"
            with RunLogger.open(path) as log:
                log.info("first")
            with RunLogger.open(path) as log:
                log.info("second")
            self.assertEqual([r["event"] for r in _records(path)], ["first", "second"])

            with RunLogger.open(path, overwrite=True) as log:
                log.info("third")
            self.assertEqual([r["event"] for r in _records(path)], ["third"])


if __name__ == "__main__":
    unittest.main()

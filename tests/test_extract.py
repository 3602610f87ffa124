from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from yt_community.errors import ExtractionError, NotFoundError, ParseError, StructureError
from yt_community.extract import extract_latest_post, extract_posts
from yt_community.offline import (
    SAMPLE_CHANNEL_PAGE,
    channel_page_html,
    initial_data_with_sections,
    sample_post_item,
)
from yt_community.run_log import RunLogger


class TestExtractLatestPost(unittest.TestCase):
    def test_returns_first_post_in_page_order(self) -> None:
        data = initial_data_with_sections(
            [
                [sample_post_item("s1-i1")],
                [sample_post_item("s2-i1"), sample_post_item("s2-i2")],
            ]
        )
        html = channel_page_html(data)

        posts = extract_posts(html)
        self.assertEqual([p.post_id for p in posts], ["s1-i1", "s2-i1", "s2-i2"])

        latest = extract_latest_post(html)
        assert latest is not None
        self.assertEqual(latest.post_id, "s1-i1")

    def test_sample_page(self) -> None:
        post = extract_latest_post(SAMPLE_CHANNEL_PAGE)
        assert post is not None
        self.assertEqual(post.post_id, "UgkxSamplePost1")
        self.assertEqual(post.content, "Nuevo video el viernes!")
        self.assertEqual(
            list(post.images),
            ["https://yt3.ggpht.com/sample-a=s1080", "https://yt3.ggpht.com/sample-b=s1080"],
        )

    def test_skips_non_post_items(self) -> None:
        data = initial_data_with_sections(
            [[{"continuationItemRenderer": {}}, sample_post_item("real")]]
        )
        post = extract_latest_post(channel_page_html(data))
        assert post is not None
        self.assertEqual(post.post_id, "real")

    def test_returns_none_without_posts(self) -> None:
        data = initial_data_with_sections([[{"continuationItemRenderer": {}}], []])
        self.assertIsNone(extract_latest_post(channel_page_html(data)))

    def test_is_idempotent(self) -> None:
        html = SAMPLE_CHANNEL_PAGE
        first = extract_latest_post(html)
        second = extract_latest_post(html)
        assert first is not None and second is not None
        self.assertEqual(first, second)
        self.assertEqual(
            json.dumps(first.to_dict(), ensure_ascii=False),
            json.dumps(second.to_dict(), ensure_ascii=False),
        )

    def test_error_kinds_share_base(self) -> None:
        cases = [
            ("<html><body>no data</body></html>", NotFoundError),
            ("<script>var ytInitialData = {oops};</script>", ParseError),
            ('<script>var ytInitialData = {"contents": {}};</script>', StructureError),
        ]
        for html, expected in cases:
            with self.subTest(expected=expected.__name__):
                with self.assertRaises(expected) as ctx:
                    extract_latest_post(html)
                self.assertIsInstance(ctx.exception, ExtractionError)

    def test_logs_fallback_and_counts(self) -> None:
        data = initial_data_with_sections(
            [[sample_post_item("p1")]], community_title="Community", other_tabs=()
        )
        html = channel_page_html(data)

        with tempfile.TemporaryDirectory() as td:
            log_path = Path(td) / "run.log"
            with RunLogger.open(log_path) as log:
                post = extract_latest_post(html, logger=log)

            assert post is not None
            self.assertEqual(post.post_id, "p1")

            records = [
                json.loads(line)
                for line in log_path.read_text(encoding="utf-8").splitlines()
                if line.strip()
            ]
            events = [r["event"] for r in records]
            self.assertEqual(
                events,
                [
                    "initial_data_located",
                    "community_tab_fallback",
                    "post_items_flattened",
                    "posts_normalized",
                ],
            )
            self.assertEqual(records[1]["level"], "WARN")
            self.assertEqual(records[3]["data"], {"posts": 1, "skipped": 0})


if __name__ == "__main__":
    unittest.main()

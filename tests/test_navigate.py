from __future__ import annotations

import unittest

from yt_community.errors import StructureError
from yt_community.navigate import (
    dig,
    flatten_post_items,
    iter_sections,
    select_tab,
)


def _tab(title: str | None, items: list[object] | None = None) -> dict[str, object]:
    renderer: dict[str, object] = {}
    if title is not None:
        renderer["title"] = title
    if items is not None:
        renderer["content"] = {
            "sectionListRenderer": {"contents": [{"itemSectionRenderer": {"contents": items}}]}
        }
    return {"tabRenderer": renderer}


def _data(tabs: object) -> dict[str, object]:
    return {"contents": {"twoColumnBrowseResultsRenderer": {"tabs": tabs}}}


def _items(data: dict[str, object], **kwargs: str) -> list[object]:
    return flatten_post_items(iter_sections(select_tab(data, **kwargs).content))


class TestDig(unittest.TestCase):
    def test_follows_keys_and_indexes(self) -> None:
        node = {"a": [{"b": "x"}, {"b": "y"}]}
        self.assertEqual(dig(node, "a", 1, "b"), "y")
        self.assertEqual(dig(node, "a", -1, "b"), "y")

    def test_returns_none_on_gaps(self) -> None:
        node = {"a": [{"b": "x"}], "s": "text"}
        self.assertIsNone(dig(node, "missing", "b"))
        self.assertIsNone(dig(node, "a", 5, "b"))
        self.assertIsNone(dig(node, "s", "b"))
        self.assertIsNone(dig(node, "a", "b"))
        self.assertIsNone(dig(None, "a"))


class TestSelectTab(unittest.TestCase):
    def test_title_match_beats_position_zero(self) -> None:
        data = _data([_tab("Inicio", ["home"]), _tab("Videos", ["video"]), _tab("Comunidad", ["post"])])
        selection = select_tab(data)
        self.assertTrue(selection.matched_title)
        self.assertEqual(selection.index, 2)
        self.assertEqual(flatten_post_items(iter_sections(selection.content)), ["post"])

    def test_falls_back_to_first_tab_without_title_match(self) -> None:
        data = _data([_tab("Home", ["first"]), _tab("Community", ["second"])])
        selection = select_tab(data)
        self.assertFalse(selection.matched_title)
        self.assertEqual(selection.index, 0)
        self.assertEqual(_items(data), ["first"])

    def test_custom_title(self) -> None:
        data = _data([_tab("Home", ["first"]), _tab("Community", ["second"])])
        self.assertEqual(_items(data, title="Community"), ["second"])

    def test_matched_tab_without_content_falls_back(self) -> None:
        data = _data([_tab("Inicio", ["home"]), _tab("Comunidad")])
        selection = select_tab(data)
        self.assertFalse(selection.matched_title)
        self.assertEqual(_items(data), ["home"])

    def test_missing_tabs_raise_structure_error(self) -> None:
        for data in ({}, {"contents": {}}, _data(None), _data([]), _data("tabs")):
            with self.subTest(data=data):
                with self.assertRaises(StructureError):
                    select_tab(data)

    def test_first_tab_without_renderer_raises(self) -> None:
        with self.assertRaises(StructureError):
            select_tab(_data([{"expandableTabRenderer": {}}]))

    def test_first_tab_without_content_yields_no_items(self) -> None:
        data = _data([_tab("Inicio")])
        self.assertEqual(_items(data), [])


class TestFlatten(unittest.TestCase):
    def test_preserves_order_across_sections(self) -> None:
        content = {
            "sectionListRenderer": {
                "contents": [
                    {"itemSectionRenderer": {"contents": ["s1-i1"]}},
                    {"itemSectionRenderer": {"contents": ["s2-i1", "s2-i2"]}},
                ]
            }
        }
        self.assertEqual(
            flatten_post_items(iter_sections(content)),
            ["s1-i1", "s2-i1", "s2-i2"],
        )

    def test_sections_without_items_are_empty(self) -> None:
        content = {
            "sectionListRenderer": {
                "contents": [
                    {"continuationItemRenderer": {}},
                    {"itemSectionRenderer": {"contents": "not-a-list"}},
                    {"itemSectionRenderer": {"contents": ["only"]}},
                ]
            }
        }
        self.assertEqual(flatten_post_items(iter_sections(content)), ["only"])

    def test_missing_section_list_is_empty(self) -> None:
        self.assertEqual(list(iter_sections({"richGridRenderer": {}})), [])
        self.assertEqual(list(iter_sections(None)), [])


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Sequence

from .errors import StructureError

COMMUNITY_TAB_TITLE = "Comunidad"

_TABS_PATH = ("contents", "twoColumnBrowseResultsRenderer", "tabs")


def dig(node: Any, *path: str | int) -> Any | None:
    """
    Follow a path of mapping keys / list indexes, returning None on any gap.

    Nothing in ytInitialData is guaranteed, so every step is optional.
    """
    current = node
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, Mapping):
                return None
            current = current.get(step)
        if current is None:
            return None
    return current


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


@dataclass(frozen=True)
class TabSelection:
    index: int
    title: str | None
    matched_title: bool
    content: Mapping[str, Any] | None


def _tab_title(tab: Any) -> str | None:
    title = dig(tab, "tabRenderer", "title")
    return title if isinstance(title, str) else None


def _tab_content(tab: Any) -> Mapping[str, Any] | None:
    content = dig(tab, "tabRenderer", "content")
    return content if isinstance(content, Mapping) else None


def select_tab(data: Mapping[str, Any], *, title: str = COMMUNITY_TAB_TITLE) -> TabSelection:
    """
    Pick the community tab out of the browse results.

    The first tab whose title equals `title` wins when it has content;
    otherwise the tab at position 0 is used. Raises StructureError when there
    is no tab collection or the first tab carries no tab renderer.
    """
    tabs = _as_list(dig(data, *_TABS_PATH))

    for index, tab in enumerate(tabs):
        if _tab_title(tab) != title:
            continue
        content = _tab_content(tab)
        if content is not None:
            return TabSelection(index=index, title=title, matched_title=True, content=content)
        break

    if not tabs or not isinstance(dig(tabs[0], "tabRenderer"), Mapping):
        raise StructureError("Community content structure not found in ytInitialData")

    return TabSelection(
        index=0,
        title=_tab_title(tabs[0]),
        matched_title=False,
        content=_tab_content(tabs[0]),
    )


def iter_sections(tab_content: Mapping[str, Any] | None) -> Iterator[Any]:
    yield from _as_list(dig(tab_content, "sectionListRenderer", "contents"))


def section_items(section: Any) -> list[Any]:
    return _as_list(dig(section, "itemSectionRenderer", "contents"))


def flatten_post_items(sections: Sequence[Any] | Iterator[Any]) -> list[Any]:
    """Concatenate the item lists of every section, keeping page order."""
    items: list[Any] = []
    for section in sections:
        items.extend(section_items(section))
    return items


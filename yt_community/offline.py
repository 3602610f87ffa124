from __future__ import annotations

import json
from typing import Any, Mapping, Sequence


def _thumbnails(base: str) -> list[dict[str, Any]]:
    return [
        {"url": f"{base}=s288", "width": 288, "height": 288},
        {"url": f"{base}=s640", "width": 640, "height": 640},
        {"url": f"{base}=s1080", "width": 1080, "height": 1080},
    ]


def sample_post_item(
    post_id: str,
    *,
    author: str = "Canal de Ejemplo",
    text_runs: Sequence[str] = ("Hola comunidad",),
    published: str = "hace 2 horas",
    image_bases: Sequence[str] = (),
) -> dict[str, Any]:
    renderer: dict[str, Any] = {
        "postId": post_id,
        "authorText": {"simpleText": author},
        "contentText": {"runs": [{"text": t} for t in text_runs]},
        "publishedTimeText": {"simpleText": published},
    }
    if image_bases:
        renderer["backstageAttachment"] = {
            "postMultiImageRenderer": {
                "images": [
                    {"backstageImageRenderer": {"image": {"thumbnails": _thumbnails(b)}}}
                    for b in image_bases
                ]
            }
        }
    return {"backstagePostThreadRenderer": {"post": {"backstagePostRenderer": renderer}}}


def initial_data_with_sections(
    sections: Sequence[Sequence[Mapping[str, Any]]],
    *,
    community_title: str = "Comunidad",
    other_tabs: Sequence[str] = ("Inicio", "Videos"),
) -> dict[str, Any]:
    """Build a ytInitialData-shaped dict whose community tab holds `sections`."""
    tabs: list[dict[str, Any]] = [
        {"tabRenderer": {"title": t, "content": {"sectionListRenderer": {"contents": []}}}}
        for t in other_tabs
    ]
    tabs.append(
        {
            "tabRenderer": {
                "title": community_title,
                "selected": True,
                "content": {
                    "sectionListRenderer": {
                        "contents": [
                            {"itemSectionRenderer": {"contents": list(items)}}
                            for items in sections
                        ]
                    }
                },
            }
        }
    )
    return {"contents": {"twoColumnBrowseResultsRenderer": {"tabs": tabs}}}


def channel_page_html(initial_data: Mapping[str, Any]) -> str:
    """Wrap a ytInitialData dict in a minimal channel page."""
    blob = json.dumps(initial_data, ensure_ascii=False)
    return (
        "<!DOCTYPE html><html><head><title>Canal de Ejemplo - YouTube</title>"
        '<script src="/s/desktop/base.js"></script>'
        '<script>window.ytcfg = {"INNERTUBE_CONTEXT_HL": "es"};</script>'
        "</head><body>"
        f"<script>var ytInitialData = {blob};</script>"
        "</body></html>"
    )


SAMPLE_CHANNEL_PAGE = channel_page_html(
    initial_data_with_sections(
        [
            [
                sample_post_item(
                    "UgkxSamplePost1",
                    text_runs=("Nuevo video ", "el viernes", "!"),
                    image_bases=("https://yt3.ggpht.com/sample-a", "https://yt3.ggpht.com/sample-b"),
                ),
            ],
            [
                sample_post_item("UgkxSamplePost2", published="hace 3 días"),
                {"continuationItemRenderer": {"trigger": "CONTINUATION_TRIGGER_ON_ITEM_SHOWN"}},
            ],
        ]
    )
)


class OfflineChannelPageFetcher:
    """Returns a canned channel page without touching the network."""

    def __init__(self, html: str = SAMPLE_CHANNEL_PAGE) -> None:
        self._html = html
        self.urls: list[str] = []

    def fetch(self, url: str) -> str:
        self.urls.append(url)
        return self._html

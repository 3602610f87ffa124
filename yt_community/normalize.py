from __future__ import annotations

from typing import Any, Mapping

from .navigate import dig
from .post import DEFAULT_AUTHOR, DEFAULT_PUBLISHED_TIME, NormalizedPost

_RENDERER_PATH = ("backstagePostThreadRenderer", "post", "backstagePostRenderer")


def _join_runs(runs: Any) -> str | None:
    if not isinstance(runs, list):
        return None
    return "".join(
        run["text"]
        for run in runs
        if isinstance(run, Mapping) and isinstance(run.get("text"), str)
    )


def _text_of(node: Any) -> str | None:
    """Read a text node that carries either `simpleText` or a `runs` list."""
    simple = dig(node, "simpleText")
    if isinstance(simple, str) and simple:
        return simple
    joined = _join_runs(dig(node, "runs"))
    return joined or None


def _largest_thumbnail_url(image_renderer: Any) -> str | None:
    # Thumbnails are listed smallest first.
    thumbnails = dig(image_renderer, "image", "thumbnails")
    if not isinstance(thumbnails, list) or not thumbnails:
        return None
    url = dig(thumbnails[-1], "url")
    return url if isinstance(url, str) and url else None


def _image_urls(renderer: Mapping[str, Any]) -> tuple[str, ...]:
    attachment = dig(renderer, "backstageAttachment")

    images = dig(attachment, "postMultiImageRenderer", "images")
    if isinstance(images, list):
        urls = (_largest_thumbnail_url(dig(img, "backstageImageRenderer")) for img in images)
        return tuple(u for u in urls if u is not None)

    single = _largest_thumbnail_url(dig(attachment, "backstageImageRenderer"))
    return (single,) if single is not None else ()


def post_renderer(item: Any) -> Mapping[str, Any] | None:
    renderer = dig(item, *_RENDERER_PATH)
    return renderer if isinstance(renderer, Mapping) else None


def normalized_post_from_item(item: Any) -> NormalizedPost | None:
    """
    Build a NormalizedPost from one section item, or None if it is not a post.

    Missing fields fall back to defaults; malformed image entries are skipped.
    """
    renderer = post_renderer(item)
    if renderer is None:
        return None

    post_id = renderer.get("postId")

    return NormalizedPost(
        post_id=post_id if isinstance(post_id, str) else "",
        author=_text_of(renderer.get("authorText")) or DEFAULT_AUTHOR,
        content=_join_runs(dig(renderer, "contentText", "runs")) or "",
        images=_image_urls(renderer),
        published_time=_text_of(renderer.get("publishedTimeText")) or DEFAULT_PUBLISHED_TIME,
    )

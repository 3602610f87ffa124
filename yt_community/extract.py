from __future__ import annotations

from typing import Any, Mapping

from .blob import find_marker_script, parse_initial_data
from .navigate import COMMUNITY_TAB_TITLE, flatten_post_items, iter_sections, select_tab
from .normalize import normalized_post_from_item
from .post import NormalizedPost
from .run_log import RunLogger


def posts_from_initial_data(
    data: Mapping[str, Any],
    *,
    tab_title: str = COMMUNITY_TAB_TITLE,
    logger: RunLogger | None = None,
) -> list[NormalizedPost]:
    selection = select_tab(data, title=tab_title)
    if logger is not None:
        if selection.matched_title:
            logger.info(
                "community_tab_selected",
                index=selection.index,
                title=selection.title,
                matched_title=True,
            )
        else:
            logger.warning(
                "community_tab_fallback",
                index=selection.index,
                title=selection.title,
                wanted_title=tab_title,
                has_content=selection.content is not None,
            )

    sections = list(iter_sections(selection.content))
    items = flatten_post_items(sections)
    if logger is not None:
        logger.info("post_items_flattened", sections=len(sections), items=len(items))

    posts: list[NormalizedPost] = []
    for item in items:
        post = normalized_post_from_item(item)
        if post is not None:
            posts.append(post)

    if logger is not None:
        logger.info("posts_normalized", posts=len(posts), skipped=len(items) - len(posts))
    return posts


def extract_posts(
    html: str,
    *,
    tab_title: str = COMMUNITY_TAB_TITLE,
    logger: RunLogger | None = None,
) -> list[NormalizedPost]:
    """
    Extract every community post on a channel page, in page order.

    Raises NotFoundError, ParseError or StructureError (all ExtractionError);
    missing optional fields never raise.
    """
    index, body = find_marker_script(html)
    data = parse_initial_data(body)
    if logger is not None:
        logger.info("initial_data_located", script_index=index, script_chars=len(body))
    return posts_from_initial_data(data, tab_title=tab_title, logger=logger)


def extract_latest_post(
    html: str,
    *,
    tab_title: str = COMMUNITY_TAB_TITLE,
    logger: RunLogger | None = None,
) -> NormalizedPost | None:
    """
    Return the most recent community post, or None when the page has none.

    "Most recent" is the first post in page order; timestamps are not compared.
    """
    posts = extract_posts(html, tab_title=tab_title, logger=logger)
    return posts[0] if posts else None

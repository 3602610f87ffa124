from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

DEFAULT_AUTHOR = "Desconocido"
DEFAULT_PUBLISHED_TIME = "No disponible"


@dataclass(frozen=True)
class NormalizedPost:
    """A stable community post record; every field is always populated."""

    post_id: str = ""
    author: str = DEFAULT_AUTHOR
    content: str = ""
    images: Sequence[str] = ()
    published_time: str = DEFAULT_PUBLISHED_TIME

    def to_dict(self) -> dict[str, Any]:
        return {
            "postId": self.post_id,
            "author": self.author,
            "content": self.content,
            "images": list(self.images),
            "publishedTime": self.published_time,
        }

from __future__ import annotations

from .config import load_config
from .config_schema import AppConfig
from .errors import (
    ConfigError,
    ExtractionError,
    FetchError,
    InputError,
    NotFoundError,
    ParseError,
    StructureError,
)
from .extract import extract_latest_post, extract_posts
from .post import NormalizedPost

__all__ = [
    "AppConfig",
    "ConfigError",
    "ExtractionError",
    "FetchError",
    "InputError",
    "NormalizedPost",
    "NotFoundError",
    "ParseError",
    "StructureError",
    "extract_latest_post",
    "extract_posts",
    "load_config",
]

"""
Image search providers and the startup-time provider selection.
"""

import logging
from typing import Optional

import httpx

from imagebot.config import Settings
from imagebot.errors import StartupConfigError
from imagebot.search.base import ImageSearcher, ProviderKind, lookup_path
from imagebot.search.google import GoogleImageSearcher
from imagebot.search.rapidapi import RapidApiImageSearcher

logger = logging.getLogger(__name__)

__all__ = [
    "GoogleImageSearcher",
    "ImageSearcher",
    "ProviderKind",
    "RapidApiImageSearcher",
    "build_searcher",
    "lookup_path",
]


def build_searcher(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ImageSearcher:
    """Pick the provider once, from ``use_google_search`` and ``google_cx_id``.

    Raises StartupConfigError when Google is requested without an engine id.
    """
    if not settings.use_google_search:
        searcher: ImageSearcher = RapidApiImageSearcher(
            settings.image_search_api_key,
            timeout=settings.http_timeout,
            transport=transport,
        )
    elif settings.has_cx_id:
        searcher = GoogleImageSearcher(
            settings.image_search_api_key,
            settings.google_cx_id,
            timeout=settings.http_timeout,
            transport=transport,
        )
    else:
        raise StartupConfigError(
            "You need to specify the google_cx_id if you want to use the google search API!"
        )

    logger.info("[SEARCH] Using %s image search", searcher.kind.value)
    return searcher

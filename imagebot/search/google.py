"""
Google Custom Search JSON API provider.
"""

from typing import Dict, Optional

import httpx

from imagebot.search.base import DEFAULT_TIMEOUT, ImageSearcher, ProviderKind

GOOGLE_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"


class GoogleImageSearcher(ImageSearcher):
    """Reads the thumbnail of the first result: ``items[0].pagemap.cse_thumbnail[0].src``."""

    kind = ProviderKind.GOOGLE
    endpoint = GOOGLE_SEARCH_URL
    result_path = ("items", 0, "pagemap", "cse_thumbnail", 0, "src")

    def __init__(
        self,
        api_key: str,
        cx_id: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(api_key, timeout=timeout, transport=transport)
        self.cx_id = cx_id

    def build_params(self, query: str) -> Dict[str, str]:
        return {
            "start": "1",
            "num": "1",
            "q": query,
            "imgSize": "medium",
            "key": self.api_key,
            "cx": self.cx_id,
        }

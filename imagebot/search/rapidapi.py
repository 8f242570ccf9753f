"""
RapidAPI (Contextual Web Search) image search provider.
"""

from typing import Dict

from imagebot.search.base import ImageSearcher, ProviderKind

RAPIDAPI_SEARCH_URL = "https://rapidapi.p.rapidapi.com/api/Search/ImageSearchAPI"
RAPIDAPI_HOST = "contextualwebsearch-websearch-v1.p.rapidapi.com"


class RapidApiImageSearcher(ImageSearcher):
    """Reads the direct URL of the first result: ``value[0].url``."""

    kind = ProviderKind.RAPIDAPI
    endpoint = RAPIDAPI_SEARCH_URL
    result_path = ("value", 0, "url")

    def build_params(self, query: str) -> Dict[str, str]:
        return {
            "pageNumber": "1",
            "pageSize": "1",
            "q": query,
            "autoCorrect": "true",
            "safeSearch": "false",
        }

    def build_headers(self) -> Dict[str, str]:
        return {
            "x-rapidapi-host": RAPIDAPI_HOST,
            "x-rapidapi-key": self.api_key,
        }

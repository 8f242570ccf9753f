"""
Image Search Base — shared request/extract flow for image-search providers.

A provider subclass supplies the endpoint, the query parameters, the auth
headers and the JSON path of the image URL. ``search()`` does one GET, decodes
the body and reads the string at that path.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Union

import httpx

from imagebot.errors import SearchTransportError, UnexpectedResponseError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0

PathKey = Union[str, int]


class ProviderKind(str, Enum):
    GOOGLE = "google"
    RAPIDAPI = "rapidapi"


def lookup_path(data: Any, path: Sequence[PathKey]) -> Any:
    """Walk ``path`` through decoded JSON.

    A missing key, an out-of-range index or a step into a non-container
    yields None, the same as an explicit JSON ``null``.
    """
    node = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(node, list) or not 0 <= key < len(node):
                return None
        elif not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node


class ImageSearcher(ABC):
    """
    Abstract base for an image-search provider.

    Instances hold only read-only configuration, so one searcher can serve
    any number of concurrent ``search()`` calls.

    Subclasses must set ``kind``, ``endpoint`` and ``result_path`` and
    implement ``build_params()``.
    """

    kind: ProviderKind
    endpoint: str
    result_path: Sequence[PathKey]

    def __init__(
        self,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    @abstractmethod
    def build_params(self, query: str) -> Dict[str, str]:
        """Query-string parameters for one search."""

    def build_headers(self) -> Dict[str, str]:
        """Request headers. Default: none."""
        return {}

    async def search(self, query: str) -> str:
        """Return the URL of the first image found for ``query``.

        Raises:
            SearchTransportError: the request could not be built or sent, or
                the body is not JSON.
            UnexpectedResponseError: no string at ``result_path``, which
                includes the provider returning zero results.
        """
        logger.debug("[SEARCH] %s query=%r", self.kind.value, query)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(
                    self.endpoint,
                    params=self.build_params(query),
                    headers=self.build_headers(),
                )
        except httpx.HTTPError as exc:
            raise SearchTransportError(f"Error sending the request: {exc}") from exc
        except (httpx.InvalidURL, UnicodeEncodeError) as exc:
            # Non-ASCII key in a header, or an unusable URL/param
            raise SearchTransportError(f"Error building the request: {exc}") from exc

        try:
            data = resp.json()
        except ValueError as exc:
            raise SearchTransportError(
                f"Error decoding the response (HTTP {resp.status_code}): {exc}"
            ) from exc

        value = lookup_path(data, self.result_path)
        if not isinstance(value, str):
            logger.debug("[SEARCH] %s HTTP %s without a result URL", self.kind.value, resp.status_code)
            raise UnexpectedResponseError(value)
        return value

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} kind={self.kind.value}>"

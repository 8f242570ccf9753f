"""
Trigger parsing — find the search query inside a chat message.
"""

from typing import Optional

TRIGGER_TOKEN = "!image"


def extract_query(text: str, token: str = TRIGGER_TOKEN) -> Optional[str]:
    """Return the first non-blank segment after the trigger token, or None.

    The segment before the first token is never a query, whether or not the
    token occurs. Segments holding only whitespace count as empty, and the
    returned query has its surrounding whitespace removed; inner spacing is
    kept as typed.

    >>> extract_query("hello !image !image dogs")
    'dogs'
    >>> extract_query("!image") is None
    True
    """
    segments = text.split(token)
    for segment in segments[1:]:
        query = segment.strip()
        if query:
            return query
    return None

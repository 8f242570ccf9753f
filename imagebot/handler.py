"""
Message handler — trigger detection, one search, one reply.

A failed search is logged with its query and produces no reply; the next
message is handled as usual.
"""

import logging

from imagebot.channels.base import InboundMessage
from imagebot.errors import ImageSearchError
from imagebot.search.base import ImageSearcher
from imagebot.structured_logging import generate_request_id, set_request_context
from imagebot.trigger import TRIGGER_TOKEN, extract_query

logger = logging.getLogger(__name__)


class ImageSearchHandler:
    """Answers ``!image <query>`` messages with the first image URL found.

    Keeps no per-message state; the gateway may call ``handle`` concurrently.
    """

    def __init__(self, searcher: ImageSearcher, token: str = TRIGGER_TOKEN):
        self.searcher = searcher
        self.token = token

    async def handle(self, message: InboundMessage) -> None:
        """Handle one inbound message."""
        query = extract_query(message.text, self.token)
        if query is None:
            return

        set_request_context(request_id=generate_request_id(), user_id=message.channel_user_id)
        logger.info("[HANDLER] Image search requested: %r", query)

        try:
            url = await self.searcher.search(query)
        except ImageSearchError as exc:
            logger.error("[HANDLER] Error getting the image URL: %s | query=%r", exc, query)
            return

        try:
            await message.reply_to.send(url)
        except Exception:
            logger.exception("[HANDLER] Error sending message to chat %s", message.channel_chat_id)


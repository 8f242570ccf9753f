"""
Discord Channel Adapter — Connects Discord to the image search handler.

Uses discord.py to:
- Receive every message the bot can read (guild channels and DMs)
- Normalise it into an ``InboundMessage`` whose reply target is the channel
- Send plain-text replies

Sharding, reconnects and rate limits are handled by discord.py itself.
"""

import logging
from typing import Optional

import discord

from imagebot.channels.base import BaseChannel, ChannelType, InboundMessage

logger = logging.getLogger(__name__)


class DiscordChannel(BaseChannel):
    """
    Discord channel adapter using discord.py.

    The bot token must belong to an application with the Message Content
    intent enabled, otherwise message text arrives empty.
    """

    def __init__(self, token: str):
        super().__init__(ChannelType.DISCORD)
        self.token = token
        self._client: Optional[discord.Client] = None

    def _build_client(self) -> discord.Client:
        intents = discord.Intents.default()
        intents.message_content = True

        client = discord.Client(intents=intents)

        @client.event
        async def on_ready():
            logger.info("[DISCORD] Bot ready as %s (ID: %s)", client.user.name, client.user.id)

        @client.event
        async def on_message(message: discord.Message):
            await self._handle_discord_message(message)

        return client

    async def _handle_discord_message(self, message: discord.Message) -> None:
        # Ignore own messages
        if self._client is not None and message.author == self._client.user:
            return

        inbound = InboundMessage(
            channel=ChannelType.DISCORD,
            channel_user_id=str(message.author.id),
            channel_chat_id=str(message.channel.id),
            text=message.content,
            reply_to=message.channel,
            username=message.author.name,
            raw=message,
        )
        await self.dispatch(inbound)

    async def start(self) -> None:
        """Log in and run until the gateway connection is closed.

        ``discord.LoginFailure`` and connection errors propagate to the caller.
        """
        self._client = self._build_client()
        logger.info("[DISCORD] Channel starting...")
        await self._client.start(self.token)

    async def stop(self) -> None:
        """Disconnect from Discord."""
        if self._client and not self._client.is_closed():
            await self._client.close()
        logger.info("[DISCORD] Channel stopped")

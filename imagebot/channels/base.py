"""
Channel Base — Abstract interface for the chat gateway.

The handler never talks to the gateway library directly. It receives an
``InboundMessage`` whose ``reply_to`` is an opaque target with an async
``send(text)``, and answers through it.

Design Principles
-----------------
* Gateway-specific logic lives **only** inside the adapter subclass.
* Inbound messages go through the ``on_message`` callback set at startup.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Protocol


logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Data objects
# ------------------------------------------------------------------

class ChannelType(str, Enum):
    DISCORD = "discord"


class ReplyTarget(Protocol):
    """Where a reply goes. ``discord.abc.Messageable`` satisfies this."""

    async def send(self, content: str) -> Any:
        ...


@dataclass
class InboundMessage:
    """Normalised inbound message."""

    channel: ChannelType
    channel_user_id: str          # Platform-specific user identifier
    channel_chat_id: str          # Platform-specific chat/channel identifier
    text: str
    reply_to: ReplyTarget
    username: Optional[str] = None
    raw: Any = None               # Original platform event


# Callback type: async def on_message(msg: InboundMessage) -> None
MessageCallback = Callable[[InboundMessage], Awaitable[None]]


# ------------------------------------------------------------------
# Abstract base
# ------------------------------------------------------------------

class BaseChannel(ABC):
    """
    Abstract base for a gateway adapter.

    Subclasses must implement:
    * ``start()`` — Connect and listen until the connection ends.
    * ``stop()``  — Disconnect.
    """

    channel_type: ChannelType
    on_message: Optional[MessageCallback] = None

    def __init__(self, channel_type: ChannelType):
        self.channel_type = channel_type
        self.on_message = None

    def set_message_callback(self, callback: MessageCallback):
        """Set the handler that receives normalised inbound messages."""
        self.on_message = callback

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @abstractmethod
    async def start(self) -> None:
        """Connect and block until the gateway connection ends."""

    @abstractmethod
    async def stop(self) -> None:
        """Gracefully disconnect from the platform."""

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def dispatch(self, msg: InboundMessage) -> None:
        """Forward a normalised inbound message to the registered callback."""
        if self.on_message:
            await self.on_message(msg)
        else:
            logger.warning("[%s] No message callback set, dropping message", self.channel_type.value)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} type={self.channel_type.value}>"

#!/usr/bin/env python3
"""
imagebot — Discord image search bot.

Usage:
    imagebot
    imagebot --config /etc/imagebot/ImageBot.toml
    python -m imagebot --config ImageBot.toml

Startup order: load config → pick the search provider → connect to Discord.
Any configuration problem stops the process before it touches the network.
"""

import argparse
import asyncio
import logging
from typing import List, Optional

import discord

from imagebot import __version__
from imagebot.channels.discord_channel import DiscordChannel
from imagebot.config import CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH, Settings, load_settings
from imagebot.errors import ConfigError
from imagebot.handler import ImageSearchHandler
from imagebot.search import build_searcher
from imagebot.search.base import ImageSearcher
from imagebot.structured_logging import setup_logging

logger = logging.getLogger("imagebot.main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imagebot",
        description="Discord bot that replies to '!image <query>' with an image URL.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to the TOML config file (default: ${CONFIG_PATH_ENV} or {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


async def run(settings: Settings, searcher: ImageSearcher, channel: Optional[DiscordChannel] = None) -> None:
    """Wire the handler to the Discord channel and run until disconnected."""
    handler = ImageSearchHandler(searcher)
    channel = channel or DiscordChannel(settings.discord_api_key)
    channel.set_message_callback(handler.handle)
    try:
        await channel.start()
    finally:
        await channel.stop()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        settings = load_settings(args.config)
        setup_logging(settings.log_level, settings.log_json)
        searcher = build_searcher(settings)
    except ConfigError as exc:
        logger.critical("❌ %s", exc)
        return 1

    try:
        asyncio.run(run(settings, searcher))
    except discord.LoginFailure as exc:
        logger.critical("❌ Discord login failed: %s", exc)
        return 1
    except (discord.DiscordException, OSError) as exc:
        logger.critical("❌ Client error: %s", exc)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

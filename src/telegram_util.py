# telegram_util.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

import logging

from telethon import TelegramClient  # pyright: ignore[reportMissingImports]
from telethon.sessions import StringSession  # pyright: ignore[reportMissingImports]

from config import RelaySettings

logger = logging.getLogger(__name__)


def get_telegram_client(settings: RelaySettings) -> TelegramClient:
    if not settings.string_session:
        raise RuntimeError("Missing Telegram session string")

    logger.info(f"Creating Telegram client for api id {settings.api_id}")
    return TelegramClient(
        StringSession(settings.string_session),
        settings.api_id,
        settings.api_hash,
        connection_retries=settings.connection_retries,
    )

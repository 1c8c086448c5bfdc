# media_transfer.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

import logging
import os
from typing import Any

from relay_errors import DownloadError, ErrorReporter, UploadError

logger = logging.getLogger(__name__)


class MediaTransfer:
    """
    Moves photo bytes between Telegram and the local staging directory.

    Download and upload failures are reported with their own kind and then
    re-raised, because nothing useful can follow either one.
    """

    def __init__(self, client: Any, reporter: ErrorReporter, destination_chat: Any):
        self.client = client
        self.reporter = reporter
        self.destination_chat = destination_chat

    async def download_media(self, media: Any, path: str) -> None:
        try:
            result = await self.client.download_media(media, file=path)
            # Telethon returns None without writing anything for empty media
            if result is None or not os.path.exists(path):
                raise FileNotFoundError(f"Nothing was downloaded to {path}")
        except Exception as e:
            await self.reporter.report(
                DownloadError(f"Error downloading media: {e}", original_exception=e)
            )
            raise
        logger.debug(f"Downloaded media to {path}")

    async def upload_file(self, path: str) -> Any:
        """
        Send the staged file to the destination conversation.

        Returns:
            The sent Telegram message, which can be replied to
        """
        try:
            message = await self.client.send_file(self.destination_chat, path)
        except Exception as e:
            await self.reporter.report(
                UploadError(f"Error uploading media: {e}", original_exception=e)
            )
            raise
        logger.debug(f"Uploaded {path} to {self.destination_chat}")
        return message

    async def trigger_remote_command(self, uploaded: Any, command: str) -> Any:
        return await uploaded.reply(command)

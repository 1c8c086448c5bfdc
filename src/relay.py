# relay.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

"""
Photo relay pipeline.

Photos the source bot posts in the watched group are downloaded, re-uploaded
to the destination group and answered with the trigger command so the lookup
bot there picks them up. Every failure is reported to the operator; none of
them escape the event handler.
"""

import asyncio
import contextlib
import logging
from enum import Enum
from typing import Any

from telethon import events  # pyright: ignore[reportMissingImports]

from config import REPORT_CHAT, RelaySettings
from event_filter import is_relay_candidate, photo_media_id
from media_stage import MediaStage
from media_transfer import MediaTransfer
from relay_errors import ErrorReporter, GeneralError

logger = logging.getLogger(__name__)

LIVENESS_MESSAGE = "Hello myself!"


class RelayState(Enum):
    RECEIVED = "received"
    VALIDATED = "validated"
    DOWNLOADED = "downloaded"
    UPLOADED = "uploaded"
    TRIGGERED = "triggered"
    CLEANED = "cleaned"
    ABORTED = "aborted"


class KeyedLocks:
    """
    One asyncio.Lock per key, dropped again once nobody holds or waits on it.
    """

    def __init__(self):
        self._entries: dict[Any, list] = {}  # {key: [lock, users]}

    @contextlib.asynccontextmanager
    async def hold(self, key):
        entry = self._entries.setdefault(key, [asyncio.Lock(), 0])
        entry[1] += 1
        try:
            async with entry[0]:
                yield
        finally:
            entry[1] -= 1
            if entry[1] == 0:
                del self._entries[key]


class PhotoRelay:
    def __init__(
        self,
        client: Any,
        settings: RelaySettings,
        reporter: ErrorReporter | None = None,
    ):
        self.client = client
        self.settings = settings
        self.reporter = reporter or ErrorReporter(client)
        self.stage = MediaStage(self.reporter, settings.download_directory)
        self.transfer = MediaTransfer(client, self.reporter, settings.destination_chat_id)
        # Relays of the same photo share a staging path, so they take turns.
        self._media_locks = KeyedLocks()

    async def start(self) -> bool:
        """
        Connect, prepare the staging directory, ping the operator and
        register the event handler.

        A failure is reported and leaves the client without a handler.

        Returns:
            True if the handler was registered, False otherwise
        """
        try:
            await self.client.connect()
            logger.info("Connected")

            self.stage.ensure_directory()

            await self.client.send_message(REPORT_CHAT, LIVENESS_MESSAGE)

            self.client.add_event_handler(self.handle, events.NewMessage())
        except Exception as e:
            await self.reporter.report(
                GeneralError(f"Error in main setup: {e}", original_exception=e)
            )
            return False

        logger.info(
            f"Relaying photos from {self.settings.target_chat_id} "
            f"to {self.settings.destination_chat_id}"
        )
        return True

    async def handle(self, event: Any) -> RelayState:
        """
        Run one incoming message through the relay.

        Returns:
            CLEANED when the photo was relayed, ABORTED otherwise
        """
        state = RelayState.RECEIVED
        try:
            if not is_relay_candidate(
                event, self.settings.target_chat_id, self.settings.bot_user_id
            ):
                logger.debug(f"Ignoring message in chat {getattr(event, 'chat_id', None)}")
                return RelayState.ABORTED
            state = RelayState.VALIDATED

            media_id = photo_media_id(event)
            if media_id is None:
                return RelayState.ABORTED

            logger.info(f"Relaying photo {media_id}")
            path = self.stage.path_for(media_id)
            async with self._media_locks.hold(media_id):
                await self.transfer.download_media(event.message.media, path)
                state = RelayState.DOWNLOADED
                try:
                    uploaded = await self.transfer.upload_file(path)
                    state = RelayState.UPLOADED
                    await self.transfer.trigger_remote_command(
                        uploaded, self.settings.trigger_command
                    )
                    state = RelayState.TRIGGERED
                finally:
                    await self.stage.delete_file(path)

            logger.info(f"Relayed photo {media_id}")
            return RelayState.CLEANED
        except Exception as e:
            logger.info(f"Relay aborted after reaching {state.value}")
            await self.reporter.report(
                GeneralError(f"Error in handler: {e}", original_exception=e)
            )
            return RelayState.ABORTED

# relay_errors.py
#
# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.
#
"""
Classified relay failures and the reporter that delivers them to the operator.
"""

import logging
from typing import Any

from config import REPORT_CHAT

logger = logging.getLogger(__name__)


class RelayError(Exception):
    """
    A failure tagged with the pipeline step that produced it.

    The kind is the class name, so each subclass marks one call site.
    """

    def __init__(self, message: str, original_exception: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_exception = original_exception

    @property
    def kind(self) -> str:
        return type(self).__name__


class DownloadError(RelayError):
    pass


class UploadError(RelayError):
    pass


class FileDeleteError(RelayError):
    pass


class GeneralError(RelayError):
    pass


def format_report(error: RelayError) -> str:
    return f"Error: {error.kind}\nMessage: {error.message}"


class ErrorReporter:
    """
    Sends classified errors to the operator's own conversation.

    The reporter is called from failure paths, so it never raises: when the
    notice cannot be sent, the send failure is logged and dropped.
    """

    def __init__(self, client: Any, report_chat: Any = REPORT_CHAT):
        self.client = client
        self.report_chat = report_chat

    async def report(self, error: RelayError) -> bool:
        """
        Deliver one error notice.

        Returns:
            True if the notice was sent, False if sending it failed
        """
        logger.warning(f"{error.kind}: {error.message}")
        try:
            await self.client.send_message(self.report_chat, format_report(error))
        except Exception:
            logger.exception(f"Failed to send error message for {error.kind}")
            return False
        return True

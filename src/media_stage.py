# media_stage.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

"""
Local staging of downloaded photos.

Each relay owns one file under the staging directory for as long as it takes
to re-upload it.
"""

import logging
import os

from config import DOWNLOAD_DIRECTORY
from relay_errors import ErrorReporter, FileDeleteError

logger = logging.getLogger(__name__)


def ensure_staging_directory(directory: str = DOWNLOAD_DIRECTORY) -> None:
    # An existing directory is fine; any other OSError propagates to startup.
    os.makedirs(directory, exist_ok=True)


def path_for(media_id: int, directory: str = DOWNLOAD_DIRECTORY) -> str:
    return os.path.join(directory, f"photo_{media_id}.jpg")


class MediaStage:
    def __init__(self, reporter: ErrorReporter, directory: str = DOWNLOAD_DIRECTORY):
        self.reporter = reporter
        self.directory = directory

    def ensure_directory(self) -> None:
        ensure_staging_directory(self.directory)

    def path_for(self, media_id: int) -> str:
        return path_for(media_id, self.directory)

    async def delete_file(self, path: str) -> bool:
        """
        Remove a staged file, reporting instead of raising on failure.

        Returns:
            True if the file was removed, False otherwise
        """
        try:
            os.remove(path)
        except OSError as e:
            await self.reporter.report(
                FileDeleteError(f"Error deleting local file: {e}", original_exception=e)
            )
            return False
        logger.debug(f"Deleted staged file {path}")
        return True

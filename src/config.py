# config.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

import os
from collections.abc import Mapping
from dataclasses import dataclass

from id_utils import normalize_peer_id

# Defaults for the optional RELAY_* environment variables

LOG_LEVEL: str = "INFO"

# Staging directory for downloaded photos
DOWNLOAD_DIRECTORY: str = "./downloads"

# Reply sent under each uploaded photo to wake the lookup bot
TRIGGER_COMMAND: str = "/search"

CONNECTION_RETRIES: int = 5

# Conversation that receives liveness pings and error reports
REPORT_CHAT: str = "me"


def _parse_connection_retries(environ: Mapping[str, str]) -> int:
    """Parse RELAY_CONNECTION_RETRIES with error handling."""
    try:
        return int(environ.get("RELAY_CONNECTION_RETRIES", CONNECTION_RETRIES))
    except ValueError:
        return CONNECTION_RETRIES


REQUIRED_VARIABLES: tuple[str, ...] = (
    "STRING_SESSION",
    "API_ID",
    "API_HASH",
    "GROUP_ID_TARGET",
    "BOT_USER_ID",
    "GROUP_ID_MINE",
)


@dataclass(frozen=True)
class RelaySettings:
    string_session: str
    api_id: int
    api_hash: str
    target_chat_id: int  # group watched for photos
    bot_user_id: int  # sender whose photos get relayed
    destination_chat_id: int  # group the photos are re-uploaded to
    download_directory: str = "./downloads"
    trigger_command: str = "/search"
    connection_retries: int = 5


def _get_optional_str(environ: Mapping[str, str], env_name: str) -> str | None:
    """Return stripped environment variable value or None if unset/empty."""
    value = environ.get(env_name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _parse_peer(environ: Mapping[str, str], env_name: str) -> int:
    try:
        return normalize_peer_id(environ[env_name])
    except ValueError as e:
        raise RuntimeError(f"Environment variable {env_name} is not a valid id: {e}") from e


def load_relay_settings(environ: Mapping[str, str] | None = None) -> RelaySettings:
    """
    Read and validate the relay configuration.

    Every variable in REQUIRED_VARIABLES must be set to a non-blank value;
    otherwise a RuntimeError naming all missing variables is raised so the
    process can abort before touching the network.
    """
    if environ is None:
        environ = os.environ

    missing = [name for name in REQUIRED_VARIABLES if not _get_optional_str(environ, name)]
    if missing:
        raise RuntimeError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    try:
        api_id = int(environ["API_ID"].strip())
    except ValueError as e:
        raise RuntimeError(f"Environment variable API_ID is not a number: {e}") from e

    return RelaySettings(
        string_session=environ["STRING_SESSION"].strip(),
        api_id=api_id,
        api_hash=environ["API_HASH"].strip(),
        target_chat_id=_parse_peer(environ, "GROUP_ID_TARGET"),
        bot_user_id=_parse_peer(environ, "BOT_USER_ID"),
        destination_chat_id=_parse_peer(environ, "GROUP_ID_MINE"),
        download_directory=_get_optional_str(environ, "RELAY_DOWNLOAD_DIR") or DOWNLOAD_DIRECTORY,
        trigger_command=_get_optional_str(environ, "RELAY_TRIGGER_COMMAND") or TRIGGER_COMMAND,
        connection_retries=_parse_connection_retries(environ),
    )

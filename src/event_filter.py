# event_filter.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

from typing import Any

from telethon.tl.types import MessageMediaPhoto, PeerUser  # pyright: ignore[reportMissingImports]

from id_utils import extract_user_id_from_peer


def is_relay_candidate(event: Any, target_chat_id: int, bot_user_id: int) -> bool:
    """
    Check whether an incoming message was posted by the source bot in the
    watched group.

    Events missing any of the inspected attributes are rejected.
    """
    if getattr(event, "chat_id", None) != target_chat_id:
        return False

    message = getattr(event, "message", None)
    from_id = getattr(message, "from_id", None)
    if not isinstance(from_id, PeerUser):
        return False

    return extract_user_id_from_peer(from_id) == bot_user_id


def photo_media_id(event: Any) -> int | None:
    """
    Return the photo id of the event's media, or None when the message does
    not carry a photo.
    """
    message = getattr(event, "message", None)
    media = getattr(message, "media", None)
    if not isinstance(media, MessageMediaPhoto):
        return None

    photo = getattr(media, "photo", None)
    if not photo:
        return None

    photo_id = getattr(photo, "id", None)
    if not isinstance(photo_id, int):
        return None
    return photo_id

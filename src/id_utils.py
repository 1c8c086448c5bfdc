# id_utils.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.


def normalize_peer_id(value):
    """
    Normalize Telegram peer/channel/user IDs:
    - Accepts an int (returns it unchanged)
    - Accepts strings like '123', '-100123' or legacy 'u123' (returns the int)
    - Raises ValueError for anything else
    """
    if isinstance(value, bool):
        raise ValueError(f"Unsupported peer id format: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        s = value.strip()
        if s.startswith("u"):
            s = s[1:]
            if s.startswith("-"):
                raise ValueError(f"Unsupported peer id format: {value!r}")
        if s.isdigit():
            return int(s)
        if s.startswith("-") and s[1:].isdigit():
            return -int(s[1:])
    raise ValueError(f"Unsupported peer id format: {value!r}")


def extract_user_id_from_peer(peer_id) -> int | None:
    """
    Extract the user ID from a Telegram peer object.

    Only user peers qualify; channel and chat peers return None.
    """
    if not peer_id:
        return None

    user_id = getattr(peer_id, "user_id", None)
    if isinstance(user_id, int) and not isinstance(user_id, bool):
        return user_id

    return None

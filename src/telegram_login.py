# telegram_login.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

"""
Log into Telegram once and print the session string for STRING_SESSION.
"""

import argparse
import asyncio
import getpass
import logging
import os

from dotenv import load_dotenv  # pyright: ignore[reportMissingImports]
from telethon import TelegramClient  # pyright: ignore[reportMissingImports]
from telethon.errors import SessionPasswordNeededError  # pyright: ignore[reportMissingImports]
from telethon.sessions import StringSession  # pyright: ignore[reportMissingImports]

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def _ensure_logged_in(client, phone: str) -> None:
    await client.connect()
    if await client.is_user_authorized():
        logger.info("Already logged in.")
        return

    logger.info("Sending code to %s...", phone)

    await client.send_code_request(phone)
    code = input(f"Enter the code you received for {phone}: ")

    try:
        await client.sign_in(phone, code)
    except SessionPasswordNeededError:
        password = getpass.getpass("Enter your 2FA password: ")
        await client.sign_in(password=password)
    except Exception as exc:
        logger.error("Login failed: %s", exc)
        raise

    me = await client.get_me()
    if me:
        logger.info(f"Logged in as: {me.username or me.first_name} ({me.id})")


async def create_session_string(api_id: int, api_hash: str, phone: str) -> str:
    client = TelegramClient(StringSession(), api_id, api_hash)
    try:
        await _ensure_logged_in(client, phone)
        return client.session.save()
    finally:
        await client.disconnect()


async def async_main(args: argparse.Namespace) -> int:
    api_id = os.environ.get("API_ID")
    api_hash = os.environ.get("API_HASH")
    if not api_id or not api_hash:
        logger.error("API_ID and API_HASH must be set to log in.")
        return 1

    phone = args.phone or input("Phone number (international format): ").strip()
    try:
        session = await create_session_string(int(api_id), api_hash, phone)
    except Exception:
        return 1

    print("Put this value in STRING_SESSION:")
    print(session)
    return 0


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Log into Telegram and print a session string for the photo relay."
    )
    parser.add_argument(
        "--phone",
        help="Phone number of the account to log in as.",
    )
    return parser.parse_args()


def main() -> int:
    load_dotenv()
    args = parse_args()
    return asyncio.run(async_main(args))


if __name__ == "__main__":
    raise SystemExit(main())

# run.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

import asyncio
import logging
import os
import signal
from typing import Any

from dotenv import load_dotenv  # pyright: ignore[reportMissingImports]

from config import LOG_LEVEL, RelaySettings, load_relay_settings
from relay import PhotoRelay
from telegram_util import get_telegram_client

logger = logging.getLogger(__name__)


def configure_logging(level_name: str | None = None) -> None:
    if level_name is None:
        level_name = os.environ.get("RELAY_LOG_LEVEL", LOG_LEVEL)
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(level=level)
    # Telethon is chatty at INFO about reconnects
    logging.getLogger("telethon").setLevel(max(level, logging.WARNING))


async def shutdown(client: Any) -> int:
    """
    Disconnect the client.

    Returns:
        The process exit code: 0 on a clean disconnect, 1 otherwise
    """
    logger.info("Disconnecting...")
    try:
        await client.disconnect()
    except Exception:
        logger.exception("Error during shutdown")
        return 1
    return 0


def _install_stop_handlers(stop: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:
            # Windows event loops have no signal handlers
            signal.signal(sig, lambda *_: loop.call_soon_threadsafe(stop.set))


async def serve(client: Any, relay: PhotoRelay, stop: asyncio.Event) -> int:
    """
    Start the relay and keep running until asked to stop or the client drops.

    A failed start is already reported by the relay; the process stays up
    without a handler until it is stopped.
    """
    started = await relay.start()

    stop_task = asyncio.create_task(stop.wait())
    waiters = [stop_task]
    disconnected = getattr(client, "disconnected", None)
    if started and asyncio.isfuture(disconnected):
        waiters.append(disconnected)

    done, pending = await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
    if stop_task in pending:
        stop_task.cancel()
        logger.error("Telegram client disconnected unexpectedly")
        await shutdown(client)
        return 1

    return await shutdown(client)


async def main(settings: RelaySettings) -> int:
    client = get_telegram_client(settings)
    relay = PhotoRelay(client, settings)

    stop = asyncio.Event()
    _install_stop_handlers(stop)
    return await serve(client, relay, stop)


def run() -> int:
    logging.getLogger("dotenv.main").setLevel(logging.ERROR)
    load_dotenv()
    configure_logging()
    try:
        settings = load_relay_settings()
    except RuntimeError:
        logger.exception("Fatal configuration error")
        return 1

    try:
        return asyncio.run(main(settings))
    except Exception:
        logger.exception("Unhandled error")
        return 1


if __name__ == "__main__":
    raise SystemExit(run())

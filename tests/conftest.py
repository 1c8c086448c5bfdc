# tests/conftest.py
#
# Copyright (c) 2025-2026 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.
#
import os

# Import pytest early so the plugin below registers cleanly
import pytest  # noqa: F401


def pytest_configure(config):
    """
    Pytest hook that runs before test collection.

    Strips real Telegram credentials from the environment so no test can
    accidentally build a live session.
    """
    for name in ("STRING_SESSION", "API_ID", "API_HASH"):
        os.environ.pop(name, None)


# Register fixtures from test_utils without an "unused import".
pytest_plugins = ["test_utils"]

"""Shared fixtures for integration tests."""

import os

import pytest

from laakhay.newsfeed.core import resolve_api_key

# Skip all integration tests unless RUN_LAAKHAY_NETWORK_TESTS=1
RUN_NETWORK = os.environ.get("RUN_LAAKHAY_NETWORK_TESTS") == "1"


@pytest.fixture
def api_key() -> str:
    key = resolve_api_key()
    if not RUN_NETWORK or not key:
        pytest.skip("Requires network access and GEMINI_API_KEY. Set RUN_LAAKHAY_NETWORK_TESTS=1")
    return key

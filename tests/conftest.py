"""Pytest configuration and shared fixtures."""

import os
from collections.abc import Iterator
from unittest.mock import patch

import pytest

CREDENTIAL_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "GEMINI_DEFAULT_MODEL")


@pytest.fixture
def clean_env() -> Iterator[None]:
    """Run the test with no Gemini settings in the environment."""
    with patch.dict(os.environ, {}):
        for name in CREDENTIAL_ENV_VARS:
            os.environ.pop(name, None)
        yield

"""Root conftest: shared test configuration."""

import os

import pytest

from chainlaunch.config import get_settings

# Ensure tests never pick up an operator's environment
for _key in [k for k in os.environ if k.startswith("CHAINLAUNCH_")]:
    del os.environ[_key]


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

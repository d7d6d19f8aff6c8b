"""Tests configurations and fixtures."""

import pytest

from synthetics_dsl import BrowserTest, Settings

BASE_URL = 'https://x.com'


@pytest.fixture
def settings() -> Settings:
    """Provide settings independent of the environment.

    Every field is passed explicitly, so `SYNTHETICS_*` variables
    set in the environment running the tests do not leak into them.

    Returns:
        Settings used to create browser tests in tests.
    """
    return Settings(
        locations=('aws:eu-central-1',),
        tags=('team:qa',),
        status='paused',
        message='Checkout is broken @qa-team',
        tick_every=3600,
        device_ids=('chrome.laptop_large',),
    )


@pytest.fixture
def browser_test(settings: Settings) -> BrowserTest:
    """Provide an empty browser test starting at `BASE_URL`.

    Returns:
        Browser test without steps.
    """
    return BrowserTest.create('Checkout', BASE_URL, settings=settings)

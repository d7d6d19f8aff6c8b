"""Runtime defaults for new browser tests.

Defaults are read from environment variables prefixed with `SYNTHETICS_`.
Collection values are given as JSON, for example::

    SYNTHETICS_LOCATIONS='["aws:eu-central-1", "aws:us-east-2"]'
    SYNTHETICS_TICK_EVERY=3600
"""

from functools import cache

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from synthetics_dsl.models import SettingsModel
from synthetics_dsl.schema import MonitorStatus

#: Bounds of the test frequency accepted by the monitoring service, in seconds.
MIN_TICK_EVERY = 60
MAX_TICK_EVERY = 604_800


class Settings(SettingsModel):
    """Defaults applied by `BrowserTest.create`."""

    model_config = SettingsConfigDict(
        env_prefix='SYNTHETICS_',
        frozen=True,
        extra='ignore',
    )

    locations: tuple[str, ...] = Field(
        default=('aws:eu-central-1',),
        description='Locations the monitoring service runs new tests from.',
    )

    tags: tuple[str, ...] = Field(
        default=(),
        description='Tags attached to new tests.',
    )

    status: MonitorStatus = Field(
        default=MonitorStatus.PAUSED,
        description='Initial status of new tests.',
    )

    message: str = Field(
        default='',
        description='Notification message sent when a new test fails.',
    )

    tick_every: int = Field(
        default=900,
        ge=MIN_TICK_EVERY,
        le=MAX_TICK_EVERY,
        description='Number of seconds between two runs of a new test.',
    )

    device_ids: tuple[str, ...] = Field(
        default=('chrome.laptop_large',),
        min_length=1,
        description='Browsers and devices new tests run on.',
    )


@cache
def get_settings() -> Settings:
    """Return settings resolved from the environment once per process.

    Returns:
        Cached settings instance.
    """
    return Settings()

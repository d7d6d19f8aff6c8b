"""Parameters of navigation steps."""

from pydantic import Field

from synthetics_dsl.models import SchemaModel

#: Bounds of a wait step, in seconds.
MIN_WAIT = 1
MAX_WAIT = 300


class UrlParams(SchemaModel):
    """Parameters of a go-to-URL step."""

    value: str = Field(
        title='Target URL',
        description='Absolute URL the browser navigates to.',
    )


class WaitParams(SchemaModel):
    """Parameters of a wait step."""

    value: int = Field(
        ge=MIN_WAIT,
        le=MAX_WAIT,
        title='Wait duration',
        description='Number of seconds to wait before the next step.',
    )


class EmptyParams(SchemaModel):
    """Parameters of steps that take none, like page refresh."""

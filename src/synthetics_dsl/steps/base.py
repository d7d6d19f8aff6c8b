"""Base step definition.

Defines the fields and setters shared by every browser test step. A
concrete step narrows `type` to a single `StepType` literal and `params`
to the matching parameter model, so the payload type of a step always
follows from its declared kind.

All setters are functional updates: they return a new step and leave
the current one unchanged.
"""

from typing import Any, Self

from pydantic import Field

from synthetics_dsl.errors import StepConfigurationError
from synthetics_dsl.models import SchemaModel

#: Longest step timeout accepted by the monitoring service, in seconds.
MAX_TIMEOUT = 300


class BaseStep(SchemaModel):
    """Base class for browser test steps."""

    name: str = Field(
        default='',
        title='Step name',
        description='Human-readable name of the step shown in test results.',
        json_schema_extra={
            'x-ref': 'StepName',
        },
    )

    allow_failure: bool | None = Field(
        default=None,
        alias='allowFailure',
        title='Allow failure',
        description='Continue with the next step when this step fails.',
        json_schema_extra={
            'x-ref': 'StepAllowFailure',
        },
    )

    is_critical: bool | None = Field(
        default=None,
        alias='isCritical',
        title='Critical step',
        description='Mark the whole test as failed when this step fails.',
        json_schema_extra={
            'x-ref': 'StepIsCritical',
        },
    )

    no_screenshot: bool | None = Field(
        default=None,
        alias='noScreenshot',
        title='Skip screenshot',
        description='Do not take a screenshot of the page for this step.',
        json_schema_extra={
            'x-ref': 'StepNoScreenshot',
        },
    )

    timeout: int | None = Field(
        default=None,
        ge=0,
        le=MAX_TIMEOUT,
        title='Step timeout',
        description='Number of seconds the step may run before it fails.',
        json_schema_extra={
            'x-ref': 'StepTimeout',
        },
    )

    def allow_failures(self, allow: bool = True) -> Self:  # noqa: FBT001, FBT002
        """Let the test continue when this step fails.

        Args:
            allow: Whether failures are allowed.

        Returns:
            The step with the flag set.
        """
        return self._replace(allow_failure=allow)

    def critical(self, critical: bool = True) -> Self:  # noqa: FBT001, FBT002
        """Fail the whole test when this step fails.

        Args:
            critical: Whether the step is critical.

        Returns:
            The step with the flag set.
        """
        return self._replace(is_critical=critical)

    def without_screenshot(self, skip: bool = True) -> Self:  # noqa: FBT001, FBT002
        """Skip the screenshot of this step.

        Args:
            skip: Whether the screenshot is skipped.

        Returns:
            The step with the flag set.
        """
        return self._replace(no_screenshot=skip)

    def with_timeout(self, seconds: int) -> Self:
        """Limit the duration of this step.

        Args:
            seconds: Number of seconds, between 0 and 300.

        Returns:
            The step with the timeout set.

        Raises:
            StepConfigurationError: If the timeout is out of range.
        """
        return self._replace(timeout=seconds)

    def _replace(self, **changes: Any) -> Self:  # noqa: ANN401
        """Derive a validated step, reporting invalid input against this step."""
        with StepConfigurationError.guard(self.name):
            return self.evolve(**changes)

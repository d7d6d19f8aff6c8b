"""Navigation steps."""

from typing import Literal

from pydantic import Field

from synthetics_dsl.schema import EmptyParams, StepType, UrlParams, WaitParams

from .base import BaseStep


class GoToUrlStep(BaseStep):
    """Navigate the browser to a URL."""

    type: Literal['goToUrl'] = StepType.GO_TO_URL.value
    params: UrlParams


class RefreshStep(BaseStep):
    """Reload the current page."""

    type: Literal['refresh'] = StepType.REFRESH.value

    params: EmptyParams = Field(
        default_factory=EmptyParams,
    )


class WaitStep(BaseStep):
    """Pause the test for a number of seconds."""

    type: Literal['wait'] = StepType.WAIT.value
    params: WaitParams

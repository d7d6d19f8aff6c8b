"""Browser test steps.

Each step kind is a separate model whose `type` literal selects the
matching parameter payload. `Step` is the discriminated union of all
kinds, used to validate and serialize the step list of a browser test.
"""

from typing import Annotated

from pydantic import Field

from .api import ApiStep
from .assertions import (
    CurrentUrlAssertionStep,
    DownloadedFileAssertionStep,
    JavascriptAssertionStep,
    PageContainsStep,
    PageLacksStep,
)
from .base import BaseStep
from .navigation import GoToUrlStep, RefreshStep, WaitStep
from .variables import JavascriptVariableStep

#: Any browser test step, selected by its `type`.
Step = Annotated[
    ApiStep
    | CurrentUrlAssertionStep
    | DownloadedFileAssertionStep
    | GoToUrlStep
    | JavascriptAssertionStep
    | JavascriptVariableStep
    | PageContainsStep
    | PageLacksStep
    | RefreshStep
    | WaitStep,
    Field(discriminator='type'),
]

__all__ = (
    'ApiStep',
    'BaseStep',
    'CurrentUrlAssertionStep',
    'DownloadedFileAssertionStep',
    'GoToUrlStep',
    'JavascriptAssertionStep',
    'JavascriptVariableStep',
    'PageContainsStep',
    'PageLacksStep',
    'RefreshStep',
    'Step',
    'WaitStep',
)

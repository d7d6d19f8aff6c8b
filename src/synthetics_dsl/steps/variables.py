"""Variable extraction steps."""

from typing import Literal

from synthetics_dsl.schema import JavascriptVariableParams, StepType

from .base import BaseStep


class JavascriptVariableStep(BaseStep):
    """Store the result of JavaScript code executed in the page in a variable."""

    type: Literal['extractFromJavascript'] = StepType.EXTRACT_FROM_JAVASCRIPT.value
    params: JavascriptVariableParams

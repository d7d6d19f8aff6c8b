"""Browser assertion steps.

Steps checking the state of the page or of the browser session:
custom JavaScript assertions, downloaded file assertions, and
assertions about the current URL and the page content.
"""

from typing import Literal, Self

from pydantic import Field

from synthetics_dsl.errors import ErrorContext, StepConfigurationError
from synthetics_dsl.schema import (
    EMPTINESS_CHECKS,
    CurrentUrlParams,
    DownloadedFileAssertionParams,
    FileNameCheckType,
    FileSizeCheckType,
    JavascriptAssertionParams,
    NameCheck,
    SizeCheck,
    StepType,
    TextParams,
)

from .base import BaseStep


class JavascriptAssertionStep(BaseStep):
    """Assertion executing custom JavaScript code in the page."""

    type: Literal['assertFromJavascript'] = StepType.ASSERT_FROM_JAVASCRIPT.value
    params: JavascriptAssertionParams


class DownloadedFileAssertionStep(BaseStep):
    """Configure a downloaded file assertion step of a browser test.

    The step checks the file downloaded by the previous steps. Each setter
    replaces the corresponding check; checks left unset are not performed.
    """

    type: Literal['assertFileDownload'] = StepType.ASSERT_FILE_DOWNLOAD.value

    params: DownloadedFileAssertionParams = Field(
        default_factory=DownloadedFileAssertionParams,
    )

    def name_check(self, check_type: FileNameCheckType | str, value: str = '') -> Self:
        """Check the name of the downloaded file.

        Args:
            check_type: The type of check to apply to the file name.
            value: Expected file name. Required unless the check type
                is `isEmpty` or `notIsEmpty`.

        Returns:
            The step with the name check set.

        Raises:
            StepConfigurationError: If the value is empty but required.
        """
        with StepConfigurationError.guard(self.name):
            check = NameCheck(type=check_type, value=value)

        if check.type not in EMPTINESS_CHECKS and not check.value:
            raise StepConfigurationError(
                'Expected value is a required parameter for the file name check '
                f'in the step {self.name!r} when the passed check type is {check.type.name}',
                context=ErrorContext(step_name=self.name),
            )

        return self._with_file(name_check=check)

    def size_check(self, check_type: FileSizeCheckType | str, value: int) -> Self:
        """Check the size of the downloaded file.

        Args:
            check_type: The type of check to apply to the file size.
            value: Expected file size in kilobytes.

        Returns:
            The step with the size check set.
        """
        with StepConfigurationError.guard(self.name):
            return self._with_file(size_check=SizeCheck(type=check_type, value=value))

    def expected_md5(self, value: str) -> Self:
        """Check the MD5 checksum of the downloaded file.

        Args:
            value: Expected MD5 checksum.

        Returns:
            The step with the checksum set.
        """
        return self._with_file(md5=value)

    def _with_file(self, **changes: object) -> Self:
        with StepConfigurationError.guard(self.name):
            file = self.params.file.evolve(**changes)
            return self._replace(params=self.params.evolve(file=file))


class CurrentUrlAssertionStep(BaseStep):
    """Assertion about the URL of the current page."""

    type: Literal['assertCurrentUrl'] = StepType.ASSERT_CURRENT_URL.value
    params: CurrentUrlParams


class PageContainsStep(BaseStep):
    """Assertion that the current page contains a text."""

    type: Literal['assertPageContains'] = StepType.ASSERT_PAGE_CONTAINS.value
    params: TextParams


class PageLacksStep(BaseStep):
    """Assertion that the current page does not contain a text."""

    type: Literal['assertPageLacks'] = StepType.ASSERT_PAGE_LACKS.value
    params: TextParams

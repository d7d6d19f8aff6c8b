"""Tests for browser assertion steps."""

from typing import TYPE_CHECKING

import pytest

from synthetics_dsl import (
    DownloadedFileAssertionStep,
    FileNameCheckType,
    FileSizeCheckType,
    StepConfigurationError,
    UrlCheckType,
)
from synthetics_dsl.schema import NameCheck, SizeCheck
from synthetics_dsl.steps import (
    CurrentUrlAssertionStep,
    JavascriptAssertionStep,
    PageContainsStep,
    PageLacksStep,
)

if TYPE_CHECKING:
    from synthetics_dsl import BrowserTest


@pytest.mark.parametrize('check_type', (
    pytest.param(FileNameCheckType.IS_EMPTY, id='is empty'),
    pytest.param(FileNameCheckType.NOT_IS_EMPTY, id='is not empty'),
    pytest.param('isEmpty', id='is empty as string'),
))
def test_name_check_without_value(browser_test: 'BrowserTest', check_type: FileNameCheckType | str) -> None:
    """Accept emptiness checks without an expected value."""
    test = browser_test.downloaded_file_assertion('Download', lambda step: step.name_check(check_type))

    step = test.steps[0]

    assert isinstance(step, DownloadedFileAssertionStep)
    assert step.params.file.name_check == NameCheck(type=FileNameCheckType(check_type), value='')


@pytest.mark.parametrize('check_type', (
    pytest.param(FileNameCheckType.EQUALS, id='equals'),
    pytest.param(FileNameCheckType.CONTAINS, id='contains'),
    pytest.param(FileNameCheckType.MATCH_REGEX, id='regex'),
))
def test_name_check_requires_value(browser_test: 'BrowserTest', check_type: FileNameCheckType) -> None:
    """Fail at once when a comparing check has no expected value."""
    pattern = (
        r"^Expected value is a required parameter for the file name check in the step "
        rf"'Download report' when the passed check type is {check_type.name}"
    )

    with pytest.raises(StepConfigurationError, match=pattern):
        browser_test.downloaded_file_assertion('Download report', lambda step: step.name_check(check_type, ''))


def test_downloaded_file_payload(browser_test: 'BrowserTest') -> None:
    """Serialize file checks with the API field names."""
    test = browser_test.downloaded_file_assertion('Download report', lambda step: (
        step.name_check(FileNameCheckType.STARTS_WITH, 'report-')
        .size_check(FileSizeCheckType.GREATER, 10)
        .expected_md5('9e107d9d372bb6826bd81d3542a419d6')
    ))

    assert test.to_payload()['steps'] == [{
        'name': 'Download report',
        'type': 'assertFileDownload',
        'params': {
            'file': {
                'nameCheck': {'type': 'startsWith', 'value': 'report-'},
                'sizeCheck': {'type': 'greater', 'value': 10},
                'md5': '9e107d9d372bb6826bd81d3542a419d6',
            },
        },
    }]


def test_file_checks_overwrite() -> None:
    """Keep the last value of every file check."""
    step = (
        DownloadedFileAssertionStep()
        .name_check(FileNameCheckType.EQUALS, 'a.csv')
        .name_check(FileNameCheckType.CONTAINS, 'b')
        .size_check(FileSizeCheckType.LOWER, 100)
        .size_check('lowerEquals', 50)
        .expected_md5('first')
        .expected_md5('second')
    )

    assert step.params.file.name_check == NameCheck(type=FileNameCheckType.CONTAINS, value='b')
    assert step.params.file.size_check == SizeCheck(type=FileSizeCheckType.LOWER_EQUALS, value=50)
    assert step.params.file.md5 == 'second'


def test_unset_file_checks() -> None:
    """Leave unset checks out of the payload."""
    step = DownloadedFileAssertionStep().expected_md5('abc')

    assert step.model_dump(mode='json', by_alias=True, exclude_none=True)['params'] == {
        'file': {'md5': 'abc'},
    }


def test_negative_size() -> None:
    """Reject negative file sizes."""
    with pytest.raises(StepConfigurationError):
        DownloadedFileAssertionStep().size_check(FileSizeCheckType.EQUALS, -1)


def test_custom_javascript_assertion(browser_test: 'BrowserTest') -> None:
    """Add a JavaScript assertion with common step options."""
    test = browser_test.custom_javascript_assertion(
        'Cart is filled',
        'return document.querySelectorAll(".cart-item").length > 0;',
        lambda step: step.with_timeout(30).allow_failures(),
    )

    step = test.steps[0]

    assert isinstance(step, JavascriptAssertionStep)
    assert test.to_payload()['steps'][0] == {
        'name': 'Cart is filled',
        'type': 'assertFromJavascript',
        'allowFailure': True,
        'timeout': 30,
        'params': {
            'code': 'return document.querySelectorAll(".cart-item").length > 0;',
        },
    }


def test_custom_javascript_assertion_without_configure(browser_test: 'BrowserTest') -> None:
    """Add a JavaScript assertion without further configuration."""
    test = browser_test.custom_javascript_assertion('Always true', 'return true;')

    assert test.steps[0].params.code == 'return true;'


def test_empty_javascript_code(browser_test: 'BrowserTest') -> None:
    """Reject JavaScript assertions without code."""
    with pytest.raises(StepConfigurationError, match=r"'Nothing'"):
        browser_test.custom_javascript_assertion('Nothing', '')


def test_current_url_assertion(browser_test: 'BrowserTest') -> None:
    """Add an assertion about the current URL."""
    test = browser_test.current_url_assertion('On checkout', UrlCheckType.CONTAINS, '/checkout')

    step = test.steps[0]

    assert isinstance(step, CurrentUrlAssertionStep)
    assert step.params.check == UrlCheckType.CONTAINS
    assert step.params.value == '/checkout'


def test_invalid_current_url_check(browser_test: 'BrowserTest') -> None:
    """Reject comparisons unknown to the monitoring API."""
    with pytest.raises(StepConfigurationError):
        browser_test.current_url_assertion('On checkout', 'looksLike', '/checkout')


def test_page_text_assertions(browser_test: 'BrowserTest') -> None:
    """Add assertions about the page content."""
    test = (
        browser_test
        .page_contains_text_assertion('Total is shown', 'Total')
        .page_not_contains_text_assertion('No error is shown', 'Something went wrong')
    )

    contains, lacks = test.steps

    assert isinstance(contains, PageContainsStep)
    assert isinstance(lacks, PageLacksStep)
    assert [step['type'] for step in test.to_payload()['steps']] == [
        'assertPageContains',
        'assertPageLacks',
    ]
    assert lacks.params.value == 'Something went wrong'

"""Example browser test definitions.

This module demonstrates how browser tests are declared in Python and
serves as a target for the command-line rendering utilities.
"""

from synthetics_dsl import (
    AssertionOperator,
    AssertionType,
    BrowserTest,
    FileNameCheckType,
    HTTPMethod,
    ParserType,
    Settings,
)

_settings = Settings(
    locations=('aws:eu-central-1',),
    tags=(),
    status='paused',
    message='',
    tick_every=900,
    device_ids=('chrome.laptop_large',),
)

login = (
    BrowserTest.create('Login', 'https://app.example.com', settings=_settings)
    .api_step('Create session', lambda step: (
        step.method(HTTPMethod.POST)
        .url('/api/session')
        .request_headers({'content-type': 'application/json'})
        .request_body('{"user": "tester"}')
        .assertion(AssertionType.STATUS_CODE, AssertionOperator.IS, 201)
        .extract_body_value('TOKEN', ParserType.JSON_PATH, '$.token')
    ))
    .navigate('Open dashboard', '/dashboard')
    .page_contains_text_assertion('Greeting is shown', 'Welcome')
)


def make_report_test() -> BrowserTest:
    """Build a test downloading a report."""
    return (
        BrowserTest.create('Report', 'https://app.example.com/reports', settings=_settings)
        .downloaded_file_assertion('Report is downloaded', lambda step: (
            step.name_check(FileNameCheckType.STARTS_WITH, 'report-')
        ))
    )


not_a_test = 42

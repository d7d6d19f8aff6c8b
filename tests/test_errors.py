"""Tests for error formatting."""

from os import linesep

import pytest

from synthetics_dsl import BrowserTest, DefinitionError, StepConfigurationError, SyntheticsError
from synthetics_dsl.errors import ErrorContext, ErrorFormatter
from synthetics_dsl.schema import WaitParams


@pytest.mark.parametrize('context, expected', (
    pytest.param(
        ErrorContext(filename='checkout.yaml'),
        ['in "checkout.yaml"'],
        id='file',
    ),
    pytest.param(
        ErrorContext(filename='checkout.yaml', line_num=2, column_num=4),
        ['in "checkout.yaml", line 3, column 5'],
        id='file position',
    ),
    pytest.param(
        ErrorContext(test_name='Checkout', step_num=0, step_name='Open cart'),
        ['in test "Checkout"', 'on step 1 "Open cart"'],
        id='step',
    ),
    pytest.param(
        ErrorContext(step_name='Open cart'),
        ['on step "Open cart"'],
        id='step without position',
    ),
    pytest.param(
        ErrorContext(),
        [],
        id='empty',
    ),
))
def test_location_lines(context: ErrorContext, expected: list[str]) -> None:
    """Describe the location of an error."""
    assert ErrorFormatter.location_lines(context) == expected


def test_format_without_context() -> None:
    """Keep the message as is when there is no context."""
    assert ErrorFormatter.format('Broken') == 'Broken'
    assert str(SyntheticsError('Broken')) == 'Broken'


def test_format_with_context() -> None:
    """Indent the location below the message and the snippet below the location."""
    message = ErrorFormatter.format('Broken', ErrorContext(test_name='Checkout', element={'value': 0}))

    assert message.split(linesep) == [
        'Broken',
        '    in test "Checkout"',
        '        ...',
        '        value: 0',
    ]


def test_snippet_replaces_runtime_objects() -> None:
    """Show runtime objects as placeholders in snippets."""
    snippet = ErrorFormatter.snippet_lines(
        ErrorContext(element={'configure': object(), 'name': 'Ping'}),
    )

    assert snippet == ['...', 'configure: <runtime object>', 'name: Ping']


def test_definition_error_locates_element(browser_test: BrowserTest) -> None:
    """Point at the failing fragment of a payload."""
    payload = browser_test.wait('Let the page settle', 5).to_payload()
    payload['steps'][0]['params']['value'] = 0

    with pytest.raises(DefinitionError, match=r'^Input should be greater than or equal to 1') as info:
        BrowserTest.from_payload(payload, filename='checkout.json')

    message = str(info.value)

    assert info.value.context is not None
    assert info.value.context['element'] == {'value': 0}
    assert 'in "checkout.json"' in message
    assert 'value: 0' in message


def test_definition_error_without_known_location() -> None:
    """Report a generic message when no fragment can be located."""
    with pytest.raises(DefinitionError, match=r'^Validation error'):
        BrowserTest.from_payload({'type': 'browser'})


def test_guard_reports_first_failing_field() -> None:
    """Convert validation failures into step configuration errors."""
    with pytest.raises(StepConfigurationError) as info:
        with StepConfigurationError.guard('Let the page settle'):
            WaitParams(value=0)

    assert info.value.message == (
        f"Invalid configuration of the step 'Let the page settle'{linesep}"
        '    value: Input should be greater than or equal to 1'
    )
    assert info.value.__cause__ is not None


def test_guard_passes_other_errors() -> None:
    """Leave errors other than validation failures untouched."""
    with pytest.raises(KeyError):
        with StepConfigurationError.guard('Lookup'):
            raise KeyError('missing')


def test_locate_keeps_known_details() -> None:
    """Add the missing location details of an error."""
    error = SyntheticsError('Broken', context=ErrorContext(step_name='Fetch', step_num=None))

    error.locate(test_name='Checkout', step_num=3, step_name='Other')

    assert error.context == ErrorContext(test_name='Checkout', step_num=3, step_name='Fetch')

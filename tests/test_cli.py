"""Tests for the command-line utilities."""

from json import loads
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner
from yaml import dump, safe_load

from synthetics_dsl import BrowserTest
from synthetics_dsl.__main__ import cli

if TYPE_CHECKING:
    from pathlib import Path

DEFINITIONS = 'tests.examples.definitions'


@pytest.fixture
def runner() -> CliRunner:
    """Provide a CLI runner."""
    return CliRunner()


def test_schema(runner: CliRunner) -> None:
    """Print the payload JSON Schema."""
    result = runner.invoke(cli, ['schema'])

    assert result.exit_code == 0, result.output

    schema = loads(result.output)

    assert schema['title'] == 'synthetics-dsl'
    assert 'ApiStep' in schema['$defs']
    assert 'StepName' in schema['$defs']
    assert 'VariableName' in schema['$defs']


@pytest.mark.parametrize('attribute, steps', (
    pytest.param('login', 3, id='value'),
    pytest.param('make_report_test', 1, id='factory'),
))
def test_render_json(runner: CliRunner, attribute: str, steps: int) -> None:
    """Render a definition as JSON to standard output."""
    result = runner.invoke(cli, ['render', f'{DEFINITIONS}:{attribute}'])

    assert result.exit_code == 0, result.output

    payload = loads(result.output)

    assert payload['type'] == 'browser'
    assert len(payload['steps']) == steps
    assert BrowserTest.from_payload(payload).to_payload() == payload


def test_render_yaml_to_file(runner: CliRunner, tmp_path: 'Path') -> None:
    """Render a definition as YAML into a file."""
    output = tmp_path / 'payloads' / 'login.yaml'

    result = runner.invoke(cli, ['render', f'{DEFINITIONS}:login', '-f', 'yaml', '-o', str(output)])

    assert result.exit_code == 0, result.output
    assert result.output == ''

    payload = safe_load(output.read_text(encoding='utf-8'))

    assert payload['name'] == 'Login'
    assert [step['type'] for step in payload['steps']] == [
        'runApiTest',
        'goToUrl',
        'assertPageContains',
    ]


@pytest.mark.parametrize('target, message', (
    pytest.param('tests.examples.definitions', 'Expected a reference like', id='no separator'),
    pytest.param('tests.examples.missing:login', 'Can not import module', id='no module'),
    pytest.param(f'{DEFINITIONS}:logout', 'has no attribute', id='no attribute'),
    pytest.param(f'{DEFINITIONS}:not_a_test', 'is not a browser test, got int', id='not a test'),
))
def test_render_invalid_target(runner: CliRunner, target: str, message: str) -> None:
    """Fail with a readable message when the target can not be rendered."""
    result = runner.invoke(cli, ['render', target])

    assert result.exit_code == 1
    assert message in result.output


def test_validate(runner: CliRunner, browser_test: BrowserTest, tmp_path: 'Path') -> None:
    """Report valid payload files."""
    path = tmp_path / 'checkout.json'
    path.write_text(browser_test.refresh('Reload').to_json(), encoding='utf-8')

    result = runner.invoke(cli, ['validate', str(path)])

    assert result.exit_code == 0, result.output
    assert f"{path}: 'Checkout' is valid (1 steps)" in result.output


def test_validate_invalid(runner: CliRunner, browser_test: BrowserTest, tmp_path: 'Path') -> None:
    """Report every invalid payload file and fail."""
    valid = tmp_path / 'valid.yaml'
    valid.write_text(browser_test.to_yaml(), encoding='utf-8')

    broken = tmp_path / 'broken.yaml'
    broken.write_text('name: [Checkout\n', encoding='utf-8')

    payload = browser_test.wait('Let the page settle', 5).to_payload()
    payload['steps'][0]['params']['value'] = 0
    invalid = tmp_path / 'invalid.yaml'
    invalid.write_text(dump(payload), encoding='utf-8')

    result = runner.invoke(cli, ['validate', str(valid), str(broken), str(invalid)])

    assert result.exit_code == 1
    assert f"{valid}: 'Checkout' is valid (0 steps)" in result.output
    assert f'{broken}: Invalid YAML' in result.output
    assert f'{invalid}: Input should be greater than or equal to 1' in result.output
    assert 'Some payloads are invalid' in result.output


@pytest.mark.parametrize('content, expected', (
    pytest.param(
        b'name: caf\xe9\n',
        'Payload file is not UTF-8 text',
        id='not utf-8',
    ),
    pytest.param(
        b'name: a\x07b\n',
        'Invalid YAML',
        id='control character',
    ),
))
def test_validate_unreadable(runner: CliRunner, tmp_path: 'Path', content: bytes, expected: str) -> None:
    """Report payload files the YAML parser can not read."""
    path = tmp_path / 'checkout.yaml'
    path.write_bytes(content)

    result = runner.invoke(cli, ['validate', str(path)])

    assert result.exit_code == 1
    assert f'{path}: {expected}' in result.output
    assert f'in "{path}"' in result.output
    assert 'Some payloads are invalid' in result.output

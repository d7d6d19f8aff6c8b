"""CLI utilities for synthetic browser test definitions.

Browser tests are written in Python; the CLI renders them into payloads
for the monitoring API and validates payload files.
"""

from pathlib import Path

from click import Choice, ClickException, argument, echo, group, option
from click import Path as PathParam

from synthetics_dsl.browser import BrowserTest
from synthetics_dsl.errors import SyntheticsError
from synthetics_dsl.jsonschema import SchemaGenerator
from synthetics_dsl.loader import load_definition

InputFilepath = PathParam(
    exists=True,
    dir_okay=False,
    readable=True,
    path_type=Path,
)

OutputFilepath = PathParam(
    dir_okay=False,
    writable=True,
    path_type=Path,
)


@group(help='Command-line utilities for synthetic browser test definitions.')
def cli() -> None:
    """Root CLI group for synthetics-dsl tools."""
    return None


@cli.command(
    name='schema',
    help='Print the browser test payload JSON Schema to standard output.',
)
def print_schema() -> None:
    """Generate and print the JSON Schema."""
    echo(SchemaGenerator.make_schema())


@cli.command(
    name='render',
    help=(
        'Render the browser test referenced as "package.module:attribute" '
        'into a monitoring API payload.'
    ),
)
@option(
    '-f', '--format', 'output_format',
    type=Choice(['json', 'yaml']),
    default='json',
    show_default=True,
    help='Payload format.',
)
@option(
    '-o', '--output',
    type=OutputFilepath,
    default=None,
    help='Write the payload to a file instead of standard output.',
)
@argument('target')
def render(target: str, output_format: str, output: Path | None) -> None:
    """Render a browser test definition.

    Args:
        target: Reference to the definition.
        output_format: `json` or `yaml`.
        output: Optional output file.
    """
    try:
        test = load_definition(target)
    except SyntheticsError as error:
        raise ClickException(str(error)) from error

    content = test.to_json() if output_format == 'json' else test.to_yaml()

    if output is None:
        echo(content.rstrip('\n'))
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open('wt', encoding='utf-8') as stream:
        stream.write(content.rstrip('\n'))
        stream.write('\n')


@cli.command(
    name='validate',
    help='Validate browser test payload files written in YAML or JSON.',
)
@argument('files', nargs=-1, type=InputFilepath)
def validate(files: tuple[Path, ...]) -> None:
    """Validate payload files against the browser test schema.

    Args:
        files: Payload files.
    """
    failed = False

    for path in files:
        try:
            test = BrowserTest.from_file(path)
        except SyntheticsError as error:
            failed = True
            echo(f'{path}: {error}', err=True)
            continue

        echo(f'{path}: {test.name!r} is valid ({len(test.steps)} steps)')

    if failed:
        raise ClickException('Some payloads are invalid')


if __name__ == '__main__':
    cli()

"""Locate browser test definitions written in Python."""

from importlib import import_module

from synthetics_dsl.browser import BrowserTest
from synthetics_dsl.errors import DefinitionError


def load_definition(target: str) -> BrowserTest:
    """Import a browser test referenced as `package.module:attribute`.

    The attribute is either a `BrowserTest` or a callable without
    arguments returning one.

    Args:
        target: Reference to the definition.

    Returns:
        The referenced browser test.

    Raises:
        DefinitionError: If the reference is malformed, can not be
            imported, or does not resolve to a browser test.
    """
    module_name, separator, attribute = target.partition(':')
    if not separator or not module_name or not attribute:
        raise DefinitionError(f'Expected a reference like "package.module:attribute", got {target!r}')

    try:
        module = import_module(module_name)
    except ImportError as base:
        raise DefinitionError(f'Can not import module {module_name!r}: {base}') from base

    try:
        value = getattr(module, attribute)
    except AttributeError as base:
        raise DefinitionError(f'Module {module_name!r} has no attribute {attribute!r}') from base

    if callable(value) and not isinstance(value, BrowserTest):
        value = value()

    if not isinstance(value, BrowserTest):
        raise DefinitionError(f'{target!r} is not a browser test, got {type(value).__name__}')

    return value

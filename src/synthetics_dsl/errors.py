"""Errors and warnings raised while building browser tests.

Every error renders a readable, multi-line message: the first line says
what went wrong, the following lines say where (payload file, browser
test, step) and, when known, show the offending fragment as YAML.
"""

from contextlib import contextmanager
from datetime import date, datetime, timedelta
from os import linesep
from typing import TYPE_CHECKING, Any, TypedDict

from pydantic import ValidationError
from yaml import dump
from yaml.error import MarkedYAMLError, YAMLError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from typing import Self

DETAILS_INDENT = ' ' * 4
RUNTIME_PLACEHOLDER = '<runtime object>'

PLAIN_TYPES = (str, bytes, bool, int, float, date, datetime, timedelta)


class ErrorContext(TypedDict, total=False):
    """Where an error happened. Every key is optional."""

    #: Payload file being loaded.
    filename: str | None
    #: Zero-based line of the problem in the file.
    line_num: int | None
    #: Zero-based column of the problem in the file.
    column_num: int | None

    #: Browser test being built or loaded.
    test_name: str | None
    #: Zero-based position of the step in the browser test.
    step_num: int | None
    #: Step being built.
    step_name: str | None

    #: Exception the error was raised from.
    error: Exception | None
    #: Payload fragment shown below the message.
    element: Any


class ErrorFormatter:
    """Mixin rendering an error message with its context."""

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Render a message followed by its location and snippet.

        Args:
            message: First line(s) of the rendered message.
            context: Optional location of the problem.

        Returns:
            The message, unchanged when there is nothing to add.
        """
        if not context:
            return message

        lines = [message]
        lines.extend(f'{DETAILS_INDENT}{line}' for line in cls.location_lines(context))
        lines.extend(f'{DETAILS_INDENT * 2}{line}' for line in cls.snippet_lines(context))

        return linesep.join(lines)

    @staticmethod
    def location_lines(context: ErrorContext) -> list[str]:
        """Describe the file position, browser test and step of a problem.

        Line and step numbers are shown one-based.

        Args:
            context: Location of the problem.

        Returns:
            One line per known location level, outermost first.
        """
        lines = []

        if filename := context.get('filename'):
            position = f'in "{filename}"'
            if (line_num := context.get('line_num')) is not None:
                position += f', line {line_num + 1}'
                if (column_num := context.get('column_num')) is not None:
                    position += f', column {column_num + 1}'
            lines.append(position)

        if test_name := context.get('test_name'):
            lines.append(f'in test "{test_name}"')

        step_num = context.get('step_num')
        step_name = context.get('step_name')
        if step_num is not None or step_name:
            words = ['on step']
            if step_num is not None:
                words.append(str(step_num + 1))
            if step_name:
                words.append(f'"{step_name}"')
            lines.append(' '.join(words))

        return lines

    @classmethod
    def snippet_lines(cls, context: ErrorContext) -> list[str]:
        """Show the source around a YAML syntax error, or the failing fragment.

        Args:
            context: Location of the problem.

        Returns:
            Snippet lines without blank lines; empty when there is nothing to show.
        """
        error = context.get('error')
        if isinstance(error, MarkedYAMLError):
            if error.problem_mark is None:
                return []
            return cls._non_blank(error.problem_mark.get_snippet(indent=0) or '')

        if 'element' not in context:
            return []

        fragment = dump(cls._plain(context['element']), indent=2, sort_keys=False)

        return ['...', *cls._non_blank(fragment)]

    @classmethod
    def _plain(cls, value: Any) -> Any:  # noqa: ANN401
        """Convert a value into data the YAML dumper can render.

        Objects other than plain scalars and containers are shown as
        a placeholder.
        """
        if value is None or isinstance(value, PLAIN_TYPES):
            return value

        if isinstance(value, dict):
            return {key: cls._plain(item) for key, item in value.items()}

        if isinstance(value, (list, tuple, set)):
            return [cls._plain(item) for item in value]

        return RUNTIME_PLACEHOLDER

    @staticmethod
    def _non_blank(text: str) -> list[str]:
        return [line for line in text.splitlines() if line.strip()]

    @staticmethod
    def _first_line(text: str | None) -> str | None:
        return next((line.strip() for line in (text or '').splitlines() if line.strip()), None)

    @classmethod
    def _describe_first_error(cls, error: ValidationError) -> str:
        """Summarize a validation error as `field.path: message`.

        Args:
            error: ValidationError raised by Pydantic.

        Returns:
            The first message of the error, prefixed with the dotted
            path of the failing field when there is one.
        """
        for item in error.errors(include_url=False, include_input=False):
            if message := cls._first_line(item.get('msg')):
                path = '.'.join(str(key) for key in item['loc'])
                return f'{path}: {message}' if path else message

        return 'Validation error'


class SyntheticsWarning(UserWarning):
    """Warning about a definition that is accepted but likely a mistake.

    For example, two extraction rules of one step binding the same
    variable name.
    """


class SyntheticsError(Exception, ErrorFormatter):
    """Base class of all errors raised by synthetics-dsl."""

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: What went wrong.
            context: Where it went wrong.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """Render the message with its context."""
        return self.format(self.message, self.context)

    def locate(self, **context: Any) -> None:  # noqa: ANN401
        """Fill in location details the error was raised without.

        Details already known to the error are kept.

        Args:
            **context: `ErrorContext` keys, e.g. the browser test and the
                position of the step being built.
        """
        known = {key: value for key, value in (self.context or {}).items() if value is not None}
        self.context = ErrorContext(**{**context, **known})


class StepConfigurationError(SyntheticsError):
    """A step builder received invalid input.

    Raised at the call site, before the step is appended to its browser
    test.
    """

    @classmethod
    def from_pydantic_error(cls, error: ValidationError, *,
                            step_name: str | None = None) -> 'Self':
        """Wrap a validation failure of a step value.

        The browser test and the position of the step are added by
        `BrowserTest.add_step` when the error escapes a configure function.

        Args:
            error: ValidationError raised while deriving the step.
            step_name: Name of the step.

        Returns:
            Error naming the step and its first failing field.
        """
        headline = f'Invalid configuration of the step {step_name!r}' if step_name else 'Invalid step configuration'

        return cls(
            f'{headline}{linesep}{DETAILS_INDENT}{cls._describe_first_error(error)}',
            context=ErrorContext(step_name=step_name, error=error),
        )

    @classmethod
    @contextmanager
    def guard(cls, step_name: str | None = None) -> 'Iterator[None]':
        """Report validation failures of the block against a step.

        Args:
            step_name: Name of the step being built.

        Yields:
            Control to the block.

        Raises:
            StepConfigurationError: If the block raises a ValidationError.
        """
        try:
            yield
        except ValidationError as base:
            raise cls.from_pydantic_error(base, step_name=step_name) from base


class UrlCompositionError(SyntheticsError):
    """A builder value is neither an absolute URL nor a location.

    The failed parse of the composed URL is chained as the cause.
    """

    def __init__(self, message: str, *, url: str, base: str | None = None,
                 context: ErrorContext | None = None) -> None:
        """Initialize an URL error.

        Args:
            message: What went wrong.
            url: Value passed to the builder.
            base: Base URL the value was appended to.
            context: Where it went wrong.
        """
        self.url = url
        self.base = base

        super().__init__(message, context=context)

    @classmethod
    def from_pydantic_error(cls, error: ValidationError, *,
                            url: str, base: str | None = None,
                            context: ErrorContext | None = None) -> 'Self':
        """Wrap the failed parse of a composed URL.

        Args:
            error: ValidationError raised by the URL parser.
            url: Value passed to the builder.
            base: Base URL the value was appended to.
            context: Step or browser test the URL was given to.

        Returns:
            Error quoting the value, the base URL and the parse failure.
        """
        source = f'{url!r} and the base URL {base!r}' if base else f'{url!r} without a base URL'

        return cls(
            f'Can not compose an URL from {source}{linesep}{DETAILS_INDENT}{cls._describe_first_error(error)}',
            url=url,
            base=base,
            context=ErrorContext(**(context or {}), error=error),
        )


class DefinitionError(SyntheticsError):
    """A browser test payload does not match the monitoring API schema.

    Also raised when a payload document is not valid YAML, and when a
    definition written in Python can not be located.
    """

    @classmethod
    def from_yaml_error(cls, error: YAMLError, *,
                        filename: str | None = None) -> 'Self':
        """Wrap an error of the YAML parser.

        Syntax errors point at their position in the document. Errors of
        the reader, like control characters in the text, carry no mark
        and are described by the first line of their message.

        Args:
            error: Exception raised by the YAML parser.
            filename: Name of the payload file; the stream name known
                to the parser is used when omitted.

        Returns:
            Error pointing at the problem, as precisely as the parser knows it.
        """
        context = ErrorContext(filename=filename, error=error)

        if not isinstance(error, MarkedYAMLError):
            problem = cls._first_line(str(error))
        else:
            problem = error.problem
            if mark := error.problem_mark:
                context.update(
                    filename=filename or mark.name,
                    line_num=mark.line,
                    column_num=mark.column,
                )

        message = 'Invalid YAML'
        if problem:
            message += f'{linesep}{DETAILS_INDENT}{problem}'

        return cls(message, context=context)

    @classmethod
    def from_pydantic_error(cls, error: ValidationError, *,
                            data: Any = None,  # noqa: ANN401
                            filename: str | None = None,
                            test_name: str | None = None) -> 'Self':
        """Wrap a payload validation failure.

        The fragment of the payload the first locatable failure points at
        is attached, so the message shows it as a snippet.

        Args:
            error: ValidationError raised by Pydantic.
            data: Validated payload.
            filename: Name of the payload file.
            test_name: Name of the browser test.

        Returns:
            Error describing the first locatable failure.
        """
        context = ErrorContext(
            filename=filename,
            test_name=test_name,
            error=error,
        )

        if not isinstance(data, dict) or not data:
            return cls('Type validation error', context=context)

        for item in error.errors(include_url=False, include_input=False):
            element = cls._find_element(data, item['loc'])
            message = cls._first_line(item.get('msg'))
            if element is not None and message:
                return cls(message, context=ErrorContext(**context, element=element))

        return cls('Validation error', context=context)

    @staticmethod
    def _find_element(data: dict[str, Any], path: 'Iterable[int | str]') -> dict[Any, Any] | list[Any] | None:
        """Follow an error path through a payload.

        Path entries missing from the payload, like the tags Pydantic
        adds for union members, are skipped.

        Args:
            data: Validated payload.
            path: Location of the failure reported by Pydantic.

        Returns:
            The deepest existing entry wrapped in its container type,
            e.g. `{'value': 0}` or `[{'type': 'wait'}]`; `None` if the
            path does not enter the payload at all.
        """
        node: Any = data
        element = None

        for key in path:
            if isinstance(node, dict) and key in node:
                element = {key: node[key]}
            elif isinstance(node, (list, tuple)) and isinstance(key, int) and 0 <= key < len(node):
                element = [node[key]]
            else:
                continue
            node = node[key]

        return element

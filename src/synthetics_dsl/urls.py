"""URL resolution for request and navigation steps.

A value passed to a builder is either an absolute URL, used verbatim, or
a location (for example, `/users/me`) appended to the base URL the step
was configured with.
"""

from contextlib import suppress

from pydantic import AnyUrl, TypeAdapter, ValidationError

from synthetics_dsl.errors import ErrorContext, UrlCompositionError

_ABSOLUTE_URL = TypeAdapter(AnyUrl)


def resolve_url(url: str, base: str | None = None, *,
                context: ErrorContext | None = None) -> str:
    """Resolve a builder value into an absolute URL.

    Surrounding whitespace is dropped. The value is then parsed as an
    absolute URL. If that fails, it is concatenated to the base URL as
    is (no separator is inserted) and parsed again. Only a failure of
    the second parse is reported.

    Args:
        url: Absolute URL or location relative to the base URL.
        base: Base URL, usually the current URL of the step.
        context: Step or browser test the URL is given to, reported
            when no URL can be composed.

    Returns:
        The stripped absolute URL, or the base URL followed by the
        stripped location.

    Raises:
        UrlCompositionError: If neither value parses as an absolute URL.
    """
    value = url.strip()

    with suppress(ValidationError):
        _ABSOLUTE_URL.validate_python(value)
        return value

    target = f'{base or ""}{value}'
    try:
        _ABSOLUTE_URL.validate_python(target)
    except ValidationError as base_error:
        raise UrlCompositionError.from_pydantic_error(
            base_error,
            url=url,
            base=base,
            context=context,
        ) from base_error

    return target

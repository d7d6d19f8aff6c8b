"""Parameters of API request steps.

Defines the payload of a `runApiTest` step: the HTTP request performed by
the monitoring service, the assertions checked against its response, and
the rules extracting response values into variables for later steps.

Every helper returns a new value; the models themselves are immutable.
"""

from typing import Literal, Self

from pydantic import Field

from synthetics_dsl.models import SchemaModel
from synthetics_dsl.names import Variable  # noqa: TC001

from .enums import AssertionOperator, AssertionType, ExtractTarget, HTTPMethod, ParserType


class HttpRequest(SchemaModel):
    """HTTP request performed by an API step."""

    method: HTTPMethod = Field(
        default=HTTPMethod.GET,
        title='Request method',
    )

    url: str | None = Field(
        default=None,
        title='Request URL',
        description='Absolute URL the request is sent to.',
    )

    headers: dict[str, str] | None = Field(
        default=None,
        title='Request headers',
        description='Mapping of header names to header values.',
    )

    body: str | None = Field(
        default=None,
        title='Request body',
    )


class Assertion(SchemaModel):
    """Condition checked against an API response."""

    type: AssertionType = Field(
        title='Assertion type',
        description='Part of the response the assertion is checked against.',
    )

    property: str | None = Field(
        default=None,
        title='Assertion property',
        description=(
            'Header name for header assertions.\n'
            'Omitted for body, status code, and response time assertions.'
        ),
    )

    operator: AssertionOperator = Field(
        title='Assertion operator',
    )

    target: int | float | str = Field(
        title='Expected value',
    )


class RequestConfig(SchemaModel):
    """Request definition together with its response assertions."""

    request: HttpRequest = Field(
        default_factory=HttpRequest,
    )

    assertions: tuple[Assertion, ...] = Field(
        default=(),
        title='Response assertions',
    )


class VariableParser(SchemaModel):
    """Parser extracting a value from a response part."""

    type: ParserType = Field(
        title='Parser type',
    )

    value: str | None = Field(
        default=None,
        title='Parser value',
        description=(
            'Regular expression, JSON path or XPath, depending on '
            'the parser type. Omitted for raw parsers.'
        ),
    )


class ExtractValue(SchemaModel):
    """Rule binding a part of an API response to a variable."""

    name: Variable

    field: str | None = Field(
        default=None,
        title='Source field',
        description='Header name for values extracted from response headers.',
    )

    parser: VariableParser

    type: ExtractTarget = Field(
        title='Extraction target',
        description='Whether the value is extracted from a header or the body.',
    )


class RequestOptions(SchemaModel):
    """Options of an API request."""

    extract_values: tuple[ExtractValue, ...] = Field(
        default=(),
        title='Extraction rules',
        description=(
            'Rules extracting response values into variables.\n'
            'Rules are applied in order; later steps can reference '
            'every extracted variable.'
        ),
    )


class ApiRequest(SchemaModel):
    """API request embedded into a browser test."""

    config: RequestConfig = Field(
        default_factory=RequestConfig,
    )

    options: RequestOptions = Field(
        default_factory=RequestOptions,
    )

    subtype: Literal['http'] = 'http'


class RequestParams(SchemaModel):
    """Parameters of an API request step."""

    request: ApiRequest = Field(
        default_factory=ApiRequest,
    )

    @classmethod
    def starting_at(cls, url: str | None) -> Self:
        """Create parameters of a GET request to the given URL.

        Args:
            url: Initial request URL, usually the start URL of the test.

        Returns:
            New request parameters.
        """
        return cls(request=ApiRequest(config=RequestConfig(request=HttpRequest(url=url))))

    @property
    def http(self) -> HttpRequest:
        """The HTTP request definition."""
        return self.request.config.request

    @property
    def assertions(self) -> tuple[Assertion, ...]:
        """The response assertions."""
        return self.request.config.assertions

    @property
    def extract_values(self) -> tuple[ExtractValue, ...]:
        """The extraction rules."""
        return self.request.options.extract_values

    def with_http(self, **changes: object) -> Self:
        """Replace fields of the HTTP request definition.

        Args:
            **changes: New `HttpRequest` field values.

        Returns:
            New request parameters.
        """
        return self._with_config(request=self.http.evolve(**changes))

    def with_assertion(self, assertion: Assertion) -> Self:
        """Append a response assertion.

        Args:
            assertion: Assertion to append.

        Returns:
            New request parameters.
        """
        return self._with_config(assertions=(*self.assertions, assertion))

    def with_extract_value(self, extract_value: ExtractValue) -> Self:
        """Append an extraction rule.

        Args:
            extract_value: Rule to append after the existing ones.

        Returns:
            New request parameters.
        """
        options = self.request.options.evolve(
            extract_values=(*self.extract_values, extract_value),
        )

        return self.evolve(request=self.request.evolve(options=options))

    def _with_config(self, **changes: object) -> Self:
        config = self.request.config.evolve(**changes)
        return self.evolve(request=self.request.evolve(config=config))

"""API request step.

An API step makes the monitoring service perform an HTTP request in the
middle of a browser test, check assertions against the response, and
extract response values into variables for the following steps.
"""

from typing import Literal, Self
from warnings import warn

from pydantic import Field

from synthetics_dsl.errors import ErrorContext, StepConfigurationError, SyntheticsWarning
from synthetics_dsl.schema import (
    Assertion,
    AssertionOperator,
    AssertionType,
    ExtractTarget,
    ExtractValue,
    HTTPMethod,
    ParserType,
    RequestParams,
    StepType,
    VariableParser,
)
from synthetics_dsl.urls import resolve_url

from .base import BaseStep


class ApiStep(BaseStep):
    """Configure an API request step of a browser test.

    Example:
        >>> step = (
        ...     ApiStep.starting_at('https://api.example.com')
        ...     .method(HTTPMethod.POST)
        ...     .url('/v1/login')
        ...     .request_body('{"user": "tester"}')
        ...     .assertion(AssertionType.STATUS_CODE, AssertionOperator.IS, 200)
        ...     .extract_header_value('SESSION', 'Set-Cookie', r'session=(\\w+)')
        ... )
    """

    type: Literal['runApiTest'] = StepType.RUN_API_TEST.value

    params: RequestParams = Field(
        default_factory=RequestParams,
    )

    @classmethod
    def starting_at(cls, url: str | None) -> Self:
        """Create an API step requesting the given URL.

        Args:
            url: Initial request URL, the base for relative `url` calls.

        Returns:
            New API step.
        """
        return cls(params=RequestParams.starting_at(url))

    def assertion(self, assertion_type: AssertionType | str,
                  operator: AssertionOperator | str,
                  expected: int | float | str,
                  property: str | None = None) -> Self:  # noqa: A002
        """Add an assertion checked against the response.

        Args:
            assertion_type: Part of the response to check.
            operator: Comparison to apply.
            expected: Expected value.
            property: Header name for header assertions. Not required
                for body or status code assertions.

        Returns:
            The step with the assertion appended.
        """
        with StepConfigurationError.guard(self.name):
            assertion = Assertion(
                type=assertion_type,
                property=property,
                operator=operator,
                target=expected,
            )
            return self._replace(params=self.params.with_assertion(assertion))

    def request_body(self, body: str) -> Self:
        """Set the body of the request.

        Args:
            body: The body of the request.

        Returns:
            The step with the request body set.
        """
        with StepConfigurationError.guard(self.name):
            return self._replace(params=self.params.with_http(body=body))

    def request_headers(self, headers: dict[str, str]) -> Self:
        """Set the headers of the request.

        Replaces all headers set before.

        Args:
            headers: Mapping of header names to header values,
                e.g. `{'content-type': 'application/json'}`.

        Returns:
            The step with the request headers set.
        """
        with StepConfigurationError.guard(self.name):
            return self._replace(params=self.params.with_http(headers=dict(headers)))

    def method(self, method: HTTPMethod | str) -> Self:
        """Set the method of the request.

        Args:
            method: HTTP method, e.g. `GET` or `POST`.

        Returns:
            The step with the method set.
        """
        with StepConfigurationError.guard(self.name):
            return self._replace(params=self.params.with_http(method=method))

    def url(self, url: str) -> Self:
        """Set the URL of the request.

        Pass a location (e.g. `/test/page`) to append it to the current
        URL of the step, which starts as the start URL of the test, or
        a full URL including `http(s)://` to replace it.

        Args:
            url: Location or absolute URL.

        Returns:
            The step with the URL set.

        Raises:
            UrlCompositionError: If no absolute URL can be composed.
        """
        target = resolve_url(url, self.params.http.url, context=ErrorContext(step_name=self.name))

        with StepConfigurationError.guard(self.name):
            return self._replace(params=self.params.with_http(url=target))

    def extract_header_value(self, name: str, field: str, regex: str | None = None) -> Self:
        """Extract a value from a response header.

        Args:
            name: Name of the variable to extract the value into.
            field: Header field to extract.
            regex: Regular expression applied to the header value.
                The raw header value is extracted when omitted.

        Returns:
            The step with the extraction rule appended.
        """
        parser_type = ParserType.RAW if regex is None else ParserType.REGEX

        with StepConfigurationError.guard(self.name):
            return self._extract(ExtractValue(
                name=name,
                field=field,
                parser=VariableParser(type=parser_type, value=regex),
                type=ExtractTarget.HTTP_HEADER,
            ))

    def extract_body_value(self, name: str, parser_type: ParserType | str,
                           parser_value: str | None = None) -> Self:
        """Extract a value from the response body.

        Args:
            name: Name of the variable to extract the value into.
            parser_type: Type of the parser to use.
            parser_value: Regular expression for `regex` parsers, JSON path
                for `json_path` parsers, XPath for `x_path` parsers.
                Not required for `raw` parsers.

        Returns:
            The step with the extraction rule appended.
        """
        with StepConfigurationError.guard(self.name):
            return self._extract(ExtractValue(
                name=name,
                parser=VariableParser(type=parser_type, value=parser_value),
                type=ExtractTarget.HTTP_BODY,
            ))

    def _extract(self, extract_value: ExtractValue) -> Self:
        if any(item.name == extract_value.name for item in self.params.extract_values):
            warn(
                f'Variable {extract_value.name!r} is extracted more than once '
                f'in the step {self.name!r}',
                category=SyntheticsWarning,
                stacklevel=3,
            )

        return self._replace(params=self.params.with_extract_value(extract_value))

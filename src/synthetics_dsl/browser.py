"""Browser test definition and step builder.

A `BrowserTest` owns the ordered list of steps submitted to the monitoring
service. It is immutable: adding a step or changing an option returns a
new test, so partially built definitions can be shared and extended
without affecting each other.

Example:
    >>> test = (
    ...     BrowserTest.create('Login', 'https://app.example.com')
    ...     .with_tags('team:identity')
    ...     .api_step('Create session', lambda step: (
    ...         step.method(HTTPMethod.POST)
    ...         .url('/api/session')
    ...         .assertion(AssertionType.STATUS_CODE, AssertionOperator.IS, 201)
    ...         .extract_body_value('TOKEN', ParserType.JSON_PATH, '$.token')
    ...     ))
    ...     .page_contains_text_assertion('Greeting is shown', 'Welcome')
    ... )
    >>> len(test.steps)
    2
"""

from collections.abc import Callable
from os import linesep
from typing import TYPE_CHECKING, Any, Literal, Self

from pydantic import Field, ValidationError
from yaml import dump, safe_load
from yaml.error import YAMLError

from synthetics_dsl.errors import (
    DETAILS_INDENT,
    DefinitionError,
    ErrorContext,
    StepConfigurationError,
    SyntheticsError,
)
from synthetics_dsl.models import SchemaModel
from synthetics_dsl.schema import (
    Assertion,
    CurrentUrlParams,
    HTTPMethod,
    JavascriptAssertionParams,
    JavascriptVariable,
    JavascriptVariableParams,
    MonitorStatus,
    TextParams,
    UrlCheckType,
    UrlParams,
    WaitParams,
)
from synthetics_dsl.settings import MAX_TICK_EVERY, MIN_TICK_EVERY, Settings, get_settings
from synthetics_dsl.steps import (
    ApiStep,
    BaseStep,
    CurrentUrlAssertionStep,
    DownloadedFileAssertionStep,
    GoToUrlStep,
    JavascriptAssertionStep,
    JavascriptVariableStep,
    PageContainsStep,
    PageLacksStep,
    RefreshStep,
    Step,
    WaitStep,
)
from synthetics_dsl.urls import resolve_url

if TYPE_CHECKING:
    from pathlib import Path

#: Function applying setters to a freshly created step.
type Configure[S: BaseStep] = Callable[[S], S]


class StartRequest(SchemaModel):
    """Page the browser opens before the first step."""

    method: Literal['GET'] = HTTPMethod.GET.value
    url: str


class BrowserTestConfig(SchemaModel):
    """Start page and test-level assertions of a browser test."""

    request: StartRequest

    assertions: tuple[Assertion, ...] = Field(
        default=(),
        title='Test assertions',
        description='Browser tests assert through steps; the API expects an empty list.',
    )


class RetryOptions(SchemaModel):
    """Retries of a failed run performed by the monitoring service."""

    count: int = Field(
        default=0,
        ge=0,
        le=5,
        title='Retry count',
    )

    interval: int = Field(
        default=300,
        ge=0,
        le=5_000,
        title='Retry interval',
        description='Milliseconds between two attempts.',
    )


class MonitorOptions(SchemaModel):
    """Scheduling and alerting options of a browser test."""

    tick_every: int = Field(
        default=900,
        ge=MIN_TICK_EVERY,
        le=MAX_TICK_EVERY,
        title='Test frequency',
        description='Number of seconds between two runs.',
    )

    min_failure_duration: int | None = Field(
        default=None,
        ge=0,
        title='Minimum failure duration',
        description='Seconds a test has to fail before an alert is sent.',
    )

    min_location_failed: int | None = Field(
        default=None,
        ge=1,
        title='Minimum failed locations',
        description='Number of locations that have to fail before an alert is sent.',
    )

    retry: RetryOptions | None = None

    device_ids: tuple[str, ...] = Field(
        default=('chrome.laptop_large',),
        min_length=1,
        title='Devices',
    )


class BrowserTest(SchemaModel):
    """Synthetic browser test definition.

    Build one with `create`, add steps with `add_step` or with the step
    helpers, and submit the result of `to_payload`.
    """

    name: str = Field(
        min_length=1,
        title='Test name',
    )

    type: Literal['browser'] = 'browser'

    config: BrowserTestConfig

    locations: tuple[str, ...] = Field(
        default=(),
        title='Locations',
        description='Locations the monitoring service runs the test from.',
    )

    message: str = Field(
        default='',
        title='Notification message',
    )

    options: MonitorOptions = Field(
        default_factory=MonitorOptions,
    )

    status: MonitorStatus = MonitorStatus.PAUSED

    tags: tuple[str, ...] = Field(
        default=(),
        title='Tags',
    )

    steps: tuple[Step, ...] = Field(
        default=(),
        title='Steps',
        description='Steps executed in order after the start page is opened.',
    )

    @classmethod
    def create(cls, name: str, url: str, settings: Settings | None = None) -> Self:
        """Create an empty browser test.

        Args:
            name: Name of the test.
            url: Absolute URL of the start page.
            settings: Defaults for locations, tags, status, message,
                frequency and devices. Resolved from the environment
                when omitted.

        Returns:
            New browser test without steps.

        Raises:
            UrlCompositionError: If the start URL is not absolute.
            DefinitionError: If the name is empty.
        """
        if settings is None:
            settings = get_settings()

        data = {
            'name': name,
            'config': {
                'request': {'url': resolve_url(url, context=ErrorContext(test_name=name))},
            },
            'locations': settings.locations,
            'message': settings.message,
            'options': {
                'tick_every': settings.tick_every,
                'device_ids': settings.device_ids,
            },
            'status': settings.status,
            'tags': settings.tags,
        }

        return cls.from_payload(data)

    @property
    def start_url(self) -> str:
        """URL of the start page, the base for relative step URLs."""
        return self.config.request.url

    def add_step[S: BaseStep](self, name: str, step: S,
                              configure: Configure[S] | None = None) -> Self:
        """Name a step, configure it, and append it to the test.

        Args:
            name: Name of the step.
            step: Initial step value.
            configure: Function receiving the named step and returning
                the configured step, typically a chain of setters.

        Returns:
            The test with the configured step appended.

        Raises:
            StepConfigurationError: If the name is empty, or if `configure`
                returns something else than a step of the same kind.
            SyntheticsError: Raised by `configure`, with the test and the
                position of the step added to its context.
        """
        context = ErrorContext(
            test_name=self.name,
            step_num=len(self.steps),
            step_name=name,
        )

        if not name:
            raise StepConfigurationError('Step name must not be empty', context=context)

        step = step.evolve(name=name)

        if configure is not None:
            try:
                configured = configure(step)
            except SyntheticsError as error:
                error.locate(**context)
                raise

            if not isinstance(configured, type(step)):
                raise StepConfigurationError(
                    f'Configuration of the step {name!r} must return the configured '
                    f'{type(step).__name__}, got {type(configured).__name__}',
                    context=context,
                )
            step = configured

        return self.model_copy(update={'steps': (*self.steps, step)})

    def api_step(self, name: str, configure: Configure[ApiStep]) -> Self:
        """Add an API request step.

        The request starts as a GET request to the start URL of the test.

        Args:
            name: Name of the step.
            configure: Function applying `ApiStep` setters.

        Returns:
            The test with the step appended.
        """
        return self.add_step(name, ApiStep.starting_at(self.start_url), configure)

    def custom_javascript_assertion(self, name: str, code: str,
                                    configure: Configure[JavascriptAssertionStep] | None = None) -> Self:
        """Add a custom JavaScript assertion step.

        Args:
            name: Name of the step.
            code: JavaScript code performing the assertion.
            configure: Optional function applying common step setters,
                like `with_timeout` or `allow_failures`.

        Returns:
            The test with the step appended.
        """
        with StepConfigurationError.guard(name):
            step = JavascriptAssertionStep(params=JavascriptAssertionParams(code=code))

        return self.add_step(name, step, configure)

    def downloaded_file_assertion(self, name: str,
                                  configure: Configure[DownloadedFileAssertionStep]) -> Self:
        """Add a downloaded file assertion step.

        Args:
            name: Name of the step.
            configure: Function applying `DownloadedFileAssertionStep` setters.

        Returns:
            The test with the step appended.
        """
        return self.add_step(name, DownloadedFileAssertionStep(), configure)

    def navigate(self, name: str, url: str) -> Self:
        """Add a step opening a URL.

        Args:
            name: Name of the step.
            url: Absolute URL, or location appended to the start URL.

        Returns:
            The test with the step appended.

        Raises:
            UrlCompositionError: If no absolute URL can be composed.
        """
        target = resolve_url(url, self.start_url, context=ErrorContext(
            test_name=self.name,
            step_num=len(self.steps),
            step_name=name,
        ))

        return self.add_step(name, GoToUrlStep(params=UrlParams(value=target)))

    def refresh(self, name: str) -> Self:
        """Add a step reloading the current page.

        Args:
            name: Name of the step.

        Returns:
            The test with the step appended.
        """
        return self.add_step(name, RefreshStep())

    def wait(self, name: str, seconds: int) -> Self:
        """Add a step pausing the test.

        Args:
            name: Name of the step.
            seconds: Number of seconds to wait, between 1 and 300.

        Returns:
            The test with the step appended.
        """
        with StepConfigurationError.guard(name):
            step = WaitStep(params=WaitParams(value=seconds))

        return self.add_step(name, step)

    def current_url_assertion(self, name: str, check: UrlCheckType | str, value: str) -> Self:
        """Add a step checking the URL of the current page.

        Args:
            name: Name of the step.
            check: Comparison applied to the current URL.
            value: Expected value.

        Returns:
            The test with the step appended.
        """
        with StepConfigurationError.guard(name):
            step = CurrentUrlAssertionStep(params=CurrentUrlParams(check=check, value=value))

        return self.add_step(name, step)

    def page_contains_text_assertion(self, name: str, text: str) -> Self:
        """Add a step checking that the current page contains a text.

        Args:
            name: Name of the step.
            text: Expected text.

        Returns:
            The test with the step appended.
        """
        with StepConfigurationError.guard(name):
            step = PageContainsStep(params=TextParams(value=text))

        return self.add_step(name, step)

    def page_not_contains_text_assertion(self, name: str, text: str) -> Self:
        """Add a step checking that the current page does not contain a text.

        Args:
            name: Name of the step.
            text: Unexpected text.

        Returns:
            The test with the step appended.
        """
        with StepConfigurationError.guard(name):
            step = PageLacksStep(params=TextParams(value=text))

        return self.add_step(name, step)

    def javascript_variable(self, name: str, variable: str, code: str, example: str = '') -> Self:
        """Add a step storing the result of JavaScript code in a variable.

        Args:
            name: Name of the step.
            variable: Name of the variable.
            code: JavaScript code returning the value.
            example: Example value shown in the monitoring service.

        Returns:
            The test with the step appended.
        """
        with StepConfigurationError.guard(name):
            step = JavascriptVariableStep(params=JavascriptVariableParams(
                code=code,
                variable=JavascriptVariable(name=variable, example=example),
            ))

        return self.add_step(name, step)

    def with_locations(self, *locations: str) -> Self:
        """Replace the locations the test runs from."""
        return self._replace(locations=locations)

    def with_tags(self, *tags: str) -> Self:
        """Replace the tags of the test."""
        return self._replace(tags=tags)

    def with_message(self, message: str) -> Self:
        """Replace the notification message of the test."""
        return self._replace(message=message)

    def with_status(self, status: MonitorStatus | str) -> Self:
        """Replace the status of the test."""
        return self._replace(status=status)

    def every(self, seconds: int) -> Self:
        """Run the test every given number of seconds."""
        return self._replace_options(tick_every=seconds)

    def alert_after(self, *, duration: int | None = None, locations: int | None = None) -> Self:
        """Delay alerts until the test fails long enough or in enough locations.

        Args:
            duration: Seconds the test has to fail before an alert is sent.
            locations: Number of locations that have to fail.

        Returns:
            The test with the alerting options set.
        """
        return self._replace_options(
            min_failure_duration=duration,
            min_location_failed=locations,
        )

    def retry(self, count: int, interval: int = 300) -> Self:
        """Let the monitoring service retry a failed run.

        Args:
            count: Number of retries, up to 5.
            interval: Milliseconds between two attempts.

        Returns:
            The test with the retry options set.
        """
        return self._replace_options(retry={'count': count, 'interval': interval})

    def on_devices(self, *device_ids: str) -> Self:
        """Replace the browsers and devices the test runs on."""
        return self._replace_options(device_ids=device_ids)

    def to_payload(self) -> dict[str, Any]:
        """Render the test as a JSON-compatible monitoring API payload.

        Returns:
            Payload with API field names; unset optional fields are dropped.
        """
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)

    def to_json(self, indent: int | None = 2) -> str:
        """Render the test payload as JSON.

        Args:
            indent: Indentation of the output; compact when `None`.

        Returns:
            JSON document.
        """
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)

    def to_yaml(self) -> str:
        """Render the test payload as YAML.

        Returns:
            YAML document.
        """
        return dump(self.to_payload(), sort_keys=False, allow_unicode=True)

    @classmethod
    def from_payload(cls, data: Any, *, filename: str | None = None) -> Self:  # noqa: ANN401
        """Rebuild a test from a monitoring API payload.

        Args:
            data: Payload, as produced by `to_payload`.
            filename: Name of the source file, used in error messages.

        Returns:
            Validated browser test.

        Raises:
            DefinitionError: If the payload does not match the schema.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as base:
            raise DefinitionError.from_pydantic_error(base, data=data, filename=filename) from base

    @classmethod
    def from_yaml(cls, content: str, *, filename: str | None = None) -> Self:
        """Rebuild a test from a YAML or JSON payload.

        Args:
            content: YAML (or JSON) document.
            filename: Name of the source file, used in error messages.

        Returns:
            Validated browser test.

        Raises:
            DefinitionError: If the document is not valid YAML or does
                not match the schema.
        """
        try:
            data = safe_load(content)
        except YAMLError as base:
            raise DefinitionError.from_yaml_error(base, filename=filename) from base

        return cls.from_payload(data, filename=filename)

    @classmethod
    def from_file(cls, path: 'Path') -> Self:
        """Rebuild a test from a YAML or JSON payload file.

        Args:
            path: Path to the payload file.

        Returns:
            Validated browser test.

        Raises:
            DefinitionError: If the file is not UTF-8 text, is not valid
                YAML or does not match the schema.
        """
        try:
            content = path.read_text(encoding='utf-8')
        except UnicodeDecodeError as base:
            raise DefinitionError(
                f'Payload file is not UTF-8 text{linesep}{DETAILS_INDENT}{base.reason} at position {base.start}',
                context=ErrorContext(filename=str(path), error=base),
            ) from base

        return cls.from_yaml(content, filename=str(path))

    def _replace(self, **changes: Any) -> Self:  # noqa: ANN401
        try:
            return self.evolve(**changes)
        except ValidationError as base:
            raise DefinitionError.from_pydantic_error(
                base,
                data={**self.to_payload(), **changes},
                test_name=self.name,
            ) from base

    def _replace_options(self, **changes: Any) -> Self:  # noqa: ANN401
        try:
            options = self.options.evolve(**changes)
        except ValidationError as base:
            raise DefinitionError.from_pydantic_error(
                base,
                data=changes,
                test_name=self.name,
            ) from base

        return self._replace(options=options)

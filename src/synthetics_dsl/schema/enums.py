"""Enumerations of the monitoring API schema.

The members mirror the wire values accepted by the Datadog Synthetics API,
so that a serialized payload can be submitted as is.
"""

from enum import StrEnum


class StepType(StrEnum):
    """Kind of a browser test step."""

    ASSERT_CURRENT_URL = 'assertCurrentUrl'
    ASSERT_FILE_DOWNLOAD = 'assertFileDownload'
    ASSERT_FROM_JAVASCRIPT = 'assertFromJavascript'
    ASSERT_PAGE_CONTAINS = 'assertPageContains'
    ASSERT_PAGE_LACKS = 'assertPageLacks'
    EXTRACT_FROM_JAVASCRIPT = 'extractFromJavascript'
    GO_TO_URL = 'goToUrl'
    REFRESH = 'refresh'
    RUN_API_TEST = 'runApiTest'
    WAIT = 'wait'


class HTTPMethod(StrEnum):
    """HTTP method of an API request."""

    GET = 'GET'
    POST = 'POST'
    PATCH = 'PATCH'
    PUT = 'PUT'
    DELETE = 'DELETE'
    HEAD = 'HEAD'
    OPTIONS = 'OPTIONS'


class AssertionType(StrEnum):
    """Part of an API response an assertion is checked against."""

    BODY = 'body'
    HEADER = 'header'
    STATUS_CODE = 'statusCode'
    RESPONSE_TIME = 'responseTime'


class AssertionOperator(StrEnum):
    """Comparison applied by an assertion."""

    CONTAINS = 'contains'
    DOES_NOT_CONTAIN = 'doesNotContain'
    IS = 'is'
    IS_NOT = 'isNot'
    LESS_THAN = 'lessThan'
    LESS_THAN_OR_EQUAL = 'lessThanOrEqual'
    MORE_THAN = 'moreThan'
    MORE_THAN_OR_EQUAL = 'moreThanOrEqual'
    MATCHES = 'matches'
    DOES_NOT_MATCH = 'doesNotMatch'
    VALIDATES = 'validates'


class ParserType(StrEnum):
    """Strategy used to extract a value from a response."""

    RAW = 'raw'
    REGEX = 'regex'
    JSON_PATH = 'json_path'
    X_PATH = 'x_path'


class ExtractTarget(StrEnum):
    """Part of an API response a value is extracted from."""

    HTTP_BODY = 'http_body'
    HTTP_HEADER = 'http_header'


class FileNameCheckType(StrEnum):
    """Comparison applied to the name of a downloaded file."""

    CONTAINS = 'contains'
    NOT_CONTAINS = 'notContains'
    EQUALS = 'equals'
    NOT_EQUALS = 'notEquals'
    STARTS_WITH = 'startsWith'
    NOT_STARTS_WITH = 'notStartsWith'
    IS_EMPTY = 'isEmpty'
    NOT_IS_EMPTY = 'notIsEmpty'
    MATCH_REGEX = 'matchRegex'


#: File name checks that compare against nothing.
EMPTINESS_CHECKS = frozenset({
    FileNameCheckType.IS_EMPTY,
    FileNameCheckType.NOT_IS_EMPTY,
})


class FileSizeCheckType(StrEnum):
    """Comparison applied to the size of a downloaded file."""

    EQUALS = 'equals'
    NOT_EQUALS = 'notEquals'
    GREATER = 'greater'
    GREATER_EQUALS = 'greaterEquals'
    LOWER = 'lower'
    LOWER_EQUALS = 'lowerEquals'


class UrlCheckType(StrEnum):
    """Comparison applied to the URL of the current page."""

    CONTAINS = 'contains'
    NOT_CONTAINS = 'notContains'
    EQUALS = 'equals'
    NOT_EQUALS = 'notEquals'
    STARTS_WITH = 'startsWith'
    NOT_STARTS_WITH = 'notStartsWith'
    MATCH_REGEX = 'matchRegex'


class MonitorStatus(StrEnum):
    """Whether the monitoring service runs the browser test."""

    LIVE = 'live'
    PAUSED = 'paused'

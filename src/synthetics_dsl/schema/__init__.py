"""Declarative schema of browser test step parameters.

Defines immutable Pydantic models mirroring the parameter payloads and
enumerations of the monitoring API. The models describe the structural
contract of every step kind and are serialized as is on submission.
"""

from .assertions import (
    CurrentUrlParams,
    DownloadedFile,
    DownloadedFileAssertionParams,
    JavascriptAssertionParams,
    NameCheck,
    SizeCheck,
    TextParams,
)
from .enums import (
    EMPTINESS_CHECKS,
    AssertionOperator,
    AssertionType,
    ExtractTarget,
    FileNameCheckType,
    FileSizeCheckType,
    HTTPMethod,
    MonitorStatus,
    ParserType,
    StepType,
    UrlCheckType,
)
from .navigation import EmptyParams, UrlParams, WaitParams
from .requests import (
    ApiRequest,
    Assertion,
    ExtractValue,
    HttpRequest,
    RequestConfig,
    RequestOptions,
    RequestParams,
    VariableParser,
)
from .variables import JavascriptVariable, JavascriptVariableParams

__all__ = (
    'EMPTINESS_CHECKS',
    'ApiRequest',
    'Assertion',
    'AssertionOperator',
    'AssertionType',
    'CurrentUrlParams',
    'DownloadedFile',
    'DownloadedFileAssertionParams',
    'EmptyParams',
    'ExtractTarget',
    'ExtractValue',
    'FileNameCheckType',
    'FileSizeCheckType',
    'HTTPMethod',
    'HttpRequest',
    'JavascriptAssertionParams',
    'JavascriptVariable',
    'JavascriptVariableParams',
    'MonitorStatus',
    'NameCheck',
    'ParserType',
    'RequestConfig',
    'RequestOptions',
    'RequestParams',
    'SizeCheck',
    'StepType',
    'TextParams',
    'UrlCheckType',
    'UrlParams',
    'VariableParser',
    'WaitParams',
)

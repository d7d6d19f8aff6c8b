"""Fluent builder for synthetic browser test definitions.

The `synthetics_dsl` package provides an embedded Python DSL for
assembling Datadog Synthetics browser tests.

Key features:
- immutable, validated models mirroring the monitoring API schema;
- step builders for API requests, JavaScript and file assertions,
  navigation, and variable extraction;
- payload rendering to JSON and YAML, and validation of payload files.

Submitting payloads to the monitoring service is left to its client.
"""

from .browser import BrowserTest
from .errors import (
    DefinitionError,
    StepConfigurationError,
    SyntheticsError,
    SyntheticsWarning,
    UrlCompositionError,
)
from .schema import (
    AssertionOperator,
    AssertionType,
    FileNameCheckType,
    FileSizeCheckType,
    HTTPMethod,
    MonitorStatus,
    ParserType,
    StepType,
    UrlCheckType,
)
from .settings import Settings
from .steps import ApiStep, DownloadedFileAssertionStep, Step

__all__ = (
    'ApiStep',
    'AssertionOperator',
    'AssertionType',
    'BrowserTest',
    'DefinitionError',
    'DownloadedFileAssertionStep',
    'FileNameCheckType',
    'FileSizeCheckType',
    'HTTPMethod',
    'MonitorStatus',
    'ParserType',
    'Settings',
    'Step',
    'StepConfigurationError',
    'StepType',
    'SyntheticsError',
    'SyntheticsWarning',
    'UrlCheckType',
    'UrlCompositionError',
)

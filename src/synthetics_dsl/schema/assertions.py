"""Parameters of browser assertion steps."""

from pydantic import Field

from synthetics_dsl.models import SchemaModel

from .enums import FileNameCheckType, FileSizeCheckType, UrlCheckType


class NameCheck(SchemaModel):
    """Check applied to the name of a downloaded file."""

    type: FileNameCheckType
    value: str = ''


class SizeCheck(SchemaModel):
    """Check applied to the size of a downloaded file."""

    type: FileSizeCheckType

    value: int = Field(
        ge=0,
        title='Expected size',
        description='Expected file size in kilobytes.',
    )


class DownloadedFile(SchemaModel):
    """Expectations about the file downloaded by the previous steps."""

    name_check: NameCheck | None = Field(
        default=None,
        alias='nameCheck',
    )

    size_check: SizeCheck | None = Field(
        default=None,
        alias='sizeCheck',
    )

    md5: str | None = Field(
        default=None,
        title='Expected MD5 checksum',
    )


class DownloadedFileAssertionParams(SchemaModel):
    """Parameters of a downloaded file assertion step."""

    file: DownloadedFile = Field(
        default_factory=DownloadedFile,
    )


class JavascriptAssertionParams(SchemaModel):
    """Parameters of a custom JavaScript assertion step."""

    code: str = Field(
        min_length=1,
        title='Assertion code',
        description=(
            'Body of a JavaScript function executed in the page. '
            'The assertion passes when the function returns a truthy value.'
        ),
    )


class CurrentUrlParams(SchemaModel):
    """Parameters of a current URL assertion step."""

    check: UrlCheckType

    value: str = Field(
        min_length=1,
        title='Expected value',
    )


class TextParams(SchemaModel):
    """Parameters of page content assertion steps."""

    value: str = Field(
        min_length=1,
        title='Text',
        description='Text searched for in the page.',
    )

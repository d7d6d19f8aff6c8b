"""Parameters of variable extraction steps."""

from pydantic import Field

from synthetics_dsl.models import SchemaModel
from synthetics_dsl.names import Variable  # noqa: TC001


class JavascriptVariable(SchemaModel):
    """Variable a JavaScript extraction step binds its result to."""

    name: Variable

    example: str = Field(
        default='',
        title='Example value',
        description='Value shown in the monitoring service while editing the test.',
    )


class JavascriptVariableParams(SchemaModel):
    """Parameters of a JavaScript extraction step."""

    code: str = Field(
        min_length=1,
        title='Extraction code',
        description=(
            'Body of a JavaScript function executed in the page. '
            'The returned value is stored in the variable.'
        ),
    )

    variable: JavascriptVariable

"""Variable names bound by extraction rules and JavaScript variable steps."""

from typing import Annotated

from pydantic import Field

#: ASCII letter first, then ASCII letters, digits or underscores.
VARIABLE_NAME = r'^[a-zA-Z][a-zA-Z0-9_]*$'


Variable = Annotated[
    str, Field(
        pattern=VARIABLE_NAME,
        title='Variable name',
        description=(
            'Name of the variable a step stores a value in. '
            'Later steps of the browser test reference it as `{{ NAME }}`.'
        ),
        examples=[
            'TOKEN',
            'ORDER_ID',
        ],
        json_schema_extra={
            'x-ref': 'VariableName',
        },
    ),
]

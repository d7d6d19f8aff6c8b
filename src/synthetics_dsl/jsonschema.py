"""JSON Schema of browser test payloads.

Fields repeated across many models, like the common flags of every step
kind, carry an `x-ref` marker. The generator emits each marked field once
under `$defs` and points every use at it, which keeps the schema of the
step union readable in editors.
"""

from functools import cache
from json import dumps
from typing import TYPE_CHECKING

from pydantic.json_schema import GenerateJsonSchema, JsonSchemaValue

from synthetics_dsl.browser import BrowserTest

if TYPE_CHECKING:
    from pydantic_core import CoreSchema

SCHEMA_TITLE = 'synthetics-dsl'


class SchemaGenerator(GenerateJsonSchema):
    """JSON Schema generator sharing the definitions of `x-ref` fields."""

    @classmethod
    @cache
    def make_schema(cls, indent: int | None = 4) -> str:
        """Render the JSON Schema of a browser test payload.

        Args:
            indent: JSON indentation; compact output when `None`.

        Returns:
            JSON document.
        """
        schema = BrowserTest.model_json_schema(
            by_alias=True,
            mode='serialization',
            schema_generator=cls,
        )
        schema.update({
            '$schema': cls.schema_dialect,
            'title': SCHEMA_TITLE,
            'description': 'Payload of a synthetic browser test for the monitoring API',
        })

        return dumps(schema, ensure_ascii=False, indent=indent, sort_keys=True)

    def generate_inner(self, schema: 'CoreSchema') -> JsonSchemaValue:
        """Generate a schema, moving fields with an `x-ref` marker to `$defs`.

        Args:
            schema: Core schema of a model, field or type.

        Returns:
            The generated schema, or a reference to the shared definition.
        """
        generated = super().generate_inner(schema)

        marker = generated.get('x-ref')
        if not marker:
            return generated

        defs_ref, reference = self.get_cache_defs_ref_schema(marker)
        self.definitions[defs_ref] = generated

        return reference

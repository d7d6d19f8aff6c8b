"""Base models of browser test definitions and runtime settings."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base model of every payload element.

    Values are frozen, so a step or a test handed out once never changes;
    builders derive new values with `evolve`. Unknown fields are rejected,
    which turns a typo in a payload file into an error. Fields accept both
    their Python name and the alias used on the wire.
    """

    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
        validate_by_name=True,
        validate_by_alias=True,
    )

    def evolve(self, **changes: Any) -> Self:  # noqa: ANN401
        """Derive a copy with some fields replaced.

        The copy is validated again, unlike `model_copy(update=...)`:
        replaced values are coerced (a string into an enum member, for
        example) and invalid ones are rejected.

        Args:
            **changes: New field values keyed by field name.

        Returns:
            New model instance.

        Raises:
            pydantic.ValidationError: If a replaced value is invalid.
        """
        return type(self).model_validate({**dict(self), **changes})


class SettingsModel(BaseSettings):
    """Base model of settings read from the environment.

    Settings are frozen once resolved. Unrelated variables in the
    environment are ignored.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )

"""Validation types for schema-deref tools."""

from typing import Annotated

from pydantic import Field
from pydantic.functional_validators import AfterValidator


def validate_non_empty_string(value: str) -> str:
    """Validate that a string is not empty after stripping whitespace."""
    stripped = value.strip()
    if not stripped:
        raise ValueError("Value cannot be empty or whitespace only")
    return stripped


ReferenceText = Annotated[
    str,
    AfterValidator(validate_non_empty_string),
    Field(
        ...,
        min_length=1,
        description=(
            "Root reference to dereference. Examples: "
            "'https://example.com/schemas/pet.json', "
            "'file:///srv/schemas/pet.yaml#/definitions/Pet', 'C:/schemas/pet.json'."
        ),
    ),
]

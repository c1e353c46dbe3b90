"""Pydantic field types for fixed-point decimals.

Two flavours are provided:

- PydanticDec: the field holds a Dec; input is a Dec or a decimal string,
  output is the 18-digit string.
- DecString: the field keeps a str, validated and normalized to the 18-digit
  form.

Example:
    class Balance(BaseModel):
        amount: PydanticDec

    Balance.model_validate_json('{"amount": "1.5"}').amount  # Dec(1.500000000000000000)
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BeforeValidator, Field, GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from fixdec.dec import Dec

__all__ = ["PydanticDec", "DecString", "validate_dec_str"]

# Optional sign, integer digits, up to 18 fractional digits
DEC_PATTERN = r"^-?[0-9]+(\.[0-9]{1,18})?$"


def validate_dec_str(value: Any) -> str:
    """Validate that a value is a valid decimal string.

    Args:
        value: Value to validate (string or Dec)

    Returns:
        Canonical 18-fractional-digit string

    Raises:
        ValueError: If value is not a valid decimal
    """
    if isinstance(value, Dec):
        return value.to_string()

    if not isinstance(value, str):
        raise ValueError(f"Decimal must be string, got {type(value).__name__}")

    # DecimalParseError is a ValueError, so pydantic reports it as a validation error
    return Dec.from_str(value).to_string()


class _DecPydanticAnnotation:
    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        _source_type: Any,
        _handler: GetCoreSchemaHandler,
    ) -> core_schema.CoreSchema:
        from_str_schema = core_schema.chain_schema(
            [
                core_schema.str_schema(),
                core_schema.no_info_plain_validator_function(Dec.from_str),
            ]
        )
        return core_schema.json_or_python_schema(
            json_schema=from_str_schema,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(Dec), from_str_schema]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda d: d.to_string()
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls,
        _core_schema: core_schema.CoreSchema,
        handler: GetJsonSchemaHandler,
    ) -> JsonSchemaValue:
        return handler(core_schema.str_schema(pattern=DEC_PATTERN))


# Dec field, validated from a decimal string and serialized back to one
PydanticDec = Annotated[Dec, _DecPydanticAnnotation]

# Decimal as a canonical string (validated)
DecString = Annotated[
    str,
    BeforeValidator(validate_dec_str),
    Field(description="18-decimal fixed-point number as string"),
]

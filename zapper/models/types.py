"""Shared type definitions for zapper wire models.

Amounts travel as decimal strings, matching the ledger's JSON encoding of its
128-bit amount type.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from zapper.safe_int import UINT128_MAX


def validate_uint128(value: Any) -> str:
    """Validate that a value is a valid uint128 decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        Valid uint128 as decimal string

    Raises:
        ValueError: If value is not a non-negative integer within uint128 range
    """
    if isinstance(value, bool):
        raise ValueError(f"Uint128 must be string or int, got {type(value).__name__}")

    # Accept int directly
    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        if not value.isdigit():
            raise ValueError(f"Uint128 must be a decimal integer string: '{value}'")
        int_value = int(value)
    else:
        raise ValueError(f"Uint128 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint128 cannot be negative: {value}")
    if int_value > UINT128_MAX:
        raise ValueError(f"Uint128 overflow: {value} > 2^128-1")

    return str(int_value)


def parse_uint128(value: str) -> int:
    """Parse a uint128 decimal string to int.

    Raises:
        ValueError: If value is not a valid uint128 decimal string
    """
    return int(validate_uint128(value))


# 128-bit unsigned integer as decimal string (validated)
Uint128 = Annotated[
    str,
    BeforeValidator(validate_uint128),
    Field(description="128-bit unsigned integer as decimal string"),
]

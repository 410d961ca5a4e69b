"""Common enums, shared types, and utilities for PotSettle models."""

from decimal import Decimal
from enum import StrEnum
from typing import Annotated, Any

from bson import ObjectId
from pydantic import BeforeValidator, PlainSerializer


def _validate_object_id(value: Any) -> str:
    """Validate and convert ObjectId or string to string representation."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, str):
        return value
    raise ValueError(f"Invalid ObjectId value: {value}")


# Annotated type for MongoDB ObjectId fields.
# Accepts ObjectId or string on input, always serializes as string.
PyObjectId = Annotated[
    str,
    BeforeValidator(_validate_object_id),
    PlainSerializer(lambda v: str(v), return_type=str),
]

# Currency amount. Kept as Decimal in memory, serialized as a decimal
# string both to MongoDB and over the API so binary floats never appear.
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: str(v), return_type=str),
]


class ValidationStatus(StrEnum):
    """Outcome of validating a session's player entries."""
    OK = "OK"
    DUPLICATE_NAMES = "DUPLICATE_NAMES"
    INCOMPLETE_FIELDS = "INCOMPLETE_FIELDS"
    UNBALANCED = "UNBALANCED"

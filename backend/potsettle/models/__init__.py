"""Pydantic models for PotSettle."""

from potsettle.models.common import Money, PyObjectId, ValidationStatus
from potsettle.models.session import (
    PlayerBalance,
    PlayerEntry,
    PlayerStanding,
    RawPlayerEntry,
    Session,
    Transfer,
)
from potsettle.models.validation import ValidationResult

__all__ = [
    # Enums and types
    "Money",
    "PyObjectId",
    "ValidationStatus",
    # Session models
    "RawPlayerEntry",
    "PlayerEntry",
    "PlayerBalance",
    "PlayerStanding",
    "Transfer",
    "Session",
    # Validation
    "ValidationResult",
]

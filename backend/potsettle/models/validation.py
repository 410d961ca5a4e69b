"""Validation result model returned by the balance validator."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from potsettle.models.common import Money, ValidationStatus


class ValidationResult(BaseModel):
    """Result of ``validate_session``.

    ``total_buy_in`` and ``total_cash_out`` are only populated for
    UNBALANCED so the caller can show both totals to the user.
    """

    model_config = {"frozen": True}

    status: ValidationStatus
    message: str = ""
    total_buy_in: Optional[Money] = None
    total_cash_out: Optional[Money] = None

    @property
    def ok(self) -> bool:
        return self.status == ValidationStatus.OK

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(status=ValidationStatus.OK)

    @classmethod
    def unbalanced(
        cls, total_buy_in: Decimal, total_cash_out: Decimal
    ) -> "ValidationResult":
        return cls(
            status=ValidationStatus.UNBALANCED,
            message=(
                "The total amounts don't match: "
                f"total buy-in {total_buy_in:.2f}, "
                f"total cash-out {total_cash_out:.2f}"
            ),
            total_buy_in=total_buy_in,
            total_cash_out=total_cash_out,
        )

"""Session domain models for PotSettle.

A session is one recorded poker game: the players' buy-ins and cash-outs
plus the transfers computed to settle it. Stored in the sessions
collection, one document per session.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from potsettle.models.common import Money, PyObjectId
from potsettle.services.money import is_currency_amount


class RawPlayerEntry(BaseModel):
    """A player row exactly as the user typed it.

    Every field is text so that the validator can tell an empty or
    non-numeric amount apart from zero. Numbers sent as JSON numbers are
    coerced to their string form.
    """

    name: str = ""
    buy_in: str = ""
    cash_out: str = ""

    @field_validator("name", "buy_in", "cash_out", mode="before")
    @classmethod
    def coerce_to_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        return value


class PlayerEntry(BaseModel):
    """A validated player row: trimmed name and non-negative whole-cent amounts."""

    model_config = {"frozen": True}

    name: str
    buy_in: Money
    cash_out: Money

    @field_validator("buy_in", "cash_out")
    @classmethod
    def check_whole_cents(cls, value: Decimal) -> Decimal:
        if not is_currency_amount(value):
            raise ValueError(
                "Amount must be a non-negative whole number of cents below 10**16"
            )
        return value

    @property
    def net(self) -> Decimal:
        """Cash-out minus buy-in."""
        return self.cash_out - self.buy_in


class PlayerBalance(BaseModel):
    """A player's net result for the session."""

    model_config = {"frozen": True}

    name: str
    net: Money


class PlayerStanding(BaseModel):
    """One row of the per-session results table."""

    name: str
    buy_in: Money
    cash_out: Money
    profit: Money


class Transfer(BaseModel):
    """A single payment from a debtor to a creditor.

    Serialized with the keys ``from``, ``to`` and ``amount``.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    from_name: str = Field(alias="from")
    to_name: str = Field(alias="to")
    amount: Money


class Session(BaseModel):
    """Represents a settled poker session stored in the sessions collection.

    Sessions are written once and never edited; the only mutation is
    deleting the whole document.
    """

    model_config = {"populate_by_name": True, "arbitrary_types_allowed": True}

    id: Optional[PyObjectId] = Field(default=None, alias="_id")
    played_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    players: list[PlayerEntry] = Field(default_factory=list)
    transfers: list[Transfer] = Field(default_factory=list)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @field_validator("played_at", "created_at")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        # Stored as ISO strings; a single offset keeps them sortable.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @field_serializer("id")
    def serialize_id(self, value: Optional[str], _info) -> Optional[str]:
        if value is not None:
            return str(value)
        return value

    @field_serializer("played_at", "created_at")
    def serialize_datetime(self, value: datetime, _info) -> str:
        return value.isoformat()

    @property
    def total_pot(self) -> Decimal:
        """Sum of all buy-ins."""
        return sum((p.buy_in for p in self.players), Decimal("0"))

    def to_mongo_dict(self) -> dict:
        """Convert model to a MongoDB-insertable dict, excluding None id."""
        data = self.model_dump(by_alias=True, mode="python")
        # Remove _id if None so MongoDB generates one
        if data.get("_id") is None:
            data.pop("_id", None)
        return data

"""Pure validation of a session's player entries.

No database access, no async. Every check returns a plain value; the
caller decides how to present failures.

Check order matches the add-session flow: duplicate names first, then
missing or non-numeric fields, then whether the money balances.
"""

from decimal import Decimal
from typing import Sequence

from potsettle.models.common import ValidationStatus
from potsettle.models.session import PlayerEntry, RawPlayerEntry
from potsettle.models.validation import ValidationResult
from potsettle.services.money import (
    is_currency_amount,
    parse_amount,
    round_currency,
    total,
)


def _normalize_name(name: str) -> str:
    return name.strip().lower()


def validate_unique_names(entries: Sequence[RawPlayerEntry | PlayerEntry]) -> bool:
    """Return False if two entries share a name after trimming and lowercasing."""
    names = [_normalize_name(e.name) for e in entries]
    return len(set(names)) == len(names)


def _is_valid_amount(value: str) -> bool:
    amount = parse_amount(value)
    return amount is not None and is_currency_amount(amount)


def validate_complete(entries: Sequence[RawPlayerEntry]) -> bool:
    """Return False if any entry has a blank name or an unusable amount.

    An amount is unusable when it is empty, not a number, not finite,
    negative, finer than a cent, or 10**16 or larger. Empty amounts are
    never treated as zero.
    """
    return all(
        e.name.strip() != ""
        and _is_valid_amount(e.buy_in)
        and _is_valid_amount(e.cash_out)
        for e in entries
    )


def compute_totals(entries: Sequence[PlayerEntry]) -> tuple[Decimal, Decimal]:
    """Return (total buy-in, total cash-out), unrounded."""
    return (
        total(e.buy_in for e in entries),
        total(e.cash_out for e in entries),
    )


def is_balanced(entries: Sequence[PlayerEntry]) -> bool:
    """Return True if the buy-in and cash-out totals match to the cent.

    Each total is rounded to 2 fractional digits on its own before the
    comparison. Entries hold whole cents, so the totals are compared
    exactly: 100.00 vs 100.01 is unbalanced.
    """
    total_buy_in, total_cash_out = compute_totals(entries)
    return round_currency(total_buy_in) == round_currency(total_cash_out)


def to_player_entries(entries: Sequence[RawPlayerEntry]) -> list[PlayerEntry]:
    """Convert complete raw entries into typed PlayerEntry values.

    Raises:
        ValueError: If an entry fails ``validate_complete``.
    """
    if not validate_complete(entries):
        raise ValueError("Entries must pass validate_complete before conversion")
    return [
        PlayerEntry(
            name=e.name.strip(),
            buy_in=parse_amount(e.buy_in),
            cash_out=parse_amount(e.cash_out),
        )
        for e in entries
    ]


def validate_session(entries: Sequence[RawPlayerEntry]) -> ValidationResult:
    """Run every check and return the first failure, or OK.

    Args:
        entries: The raw player rows for one session.

    Returns:
        A ValidationResult. UNBALANCED results carry both rounded totals.
    """
    if not validate_unique_names(entries):
        return ValidationResult(
            status=ValidationStatus.DUPLICATE_NAMES,
            message=(
                "There are duplicate player names. "
                "Please make sure all players have unique names."
            ),
        )

    if not entries or not validate_complete(entries):
        return ValidationResult(
            status=ValidationStatus.INCOMPLETE_FIELDS,
            message="Please fill in all player information",
        )

    players = to_player_entries(entries)
    if not is_balanced(players):
        total_buy_in, total_cash_out = compute_totals(players)
        return ValidationResult.unbalanced(
            round_currency(total_buy_in), round_currency(total_cash_out)
        )

    return ValidationResult.success()

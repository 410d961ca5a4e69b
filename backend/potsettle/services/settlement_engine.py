"""Pure functions for settling a poker session.

No database access, no async. Inputs are validated PlayerEntry values;
outputs are new model instances. Nothing passed in is mutated.
"""

from typing import Sequence

from potsettle.models.session import (
    PlayerBalance,
    PlayerEntry,
    PlayerStanding,
    Transfer,
)
from potsettle.services.balance_validator import compute_totals, is_balanced
from potsettle.services.money import ZERO, round_currency


class UnbalancedSessionError(ValueError):
    """Raised when settle() is called on entries whose totals differ."""


def compute_balances(entries: Sequence[PlayerEntry]) -> list[PlayerBalance]:
    """Compute each player's net result (cash-out minus buy-in), in input order."""
    return [PlayerBalance(name=e.name, net=e.net) for e in entries]


def compute_standings(entries: Sequence[PlayerEntry]) -> list[PlayerStanding]:
    """Build the results table for a session, biggest winner first.

    Players with equal profit keep their input order.
    """
    standings = [
        PlayerStanding(
            name=e.name,
            buy_in=e.buy_in,
            cash_out=e.cash_out,
            profit=e.net,
        )
        for e in entries
    ]
    standings.sort(key=lambda s: s.profit, reverse=True)
    return standings


def settle(entries: Sequence[PlayerEntry]) -> list[Transfer]:
    """Compute the transfers that bring every player's balance to zero.

    Greedy matching: debtors are taken most-negative first and each pays
    the largest remaining creditors in turn. The creditor pointer only
    moves forward, so a creditor left partly paid by one debtor is paid
    the rest by the next. One debtor may pay several creditors and one
    creditor may be paid by several debtors.

    Entries hold whole cents, so every payment is an exact cent amount
    and the transfers from or to a player add up to that player's net
    balance exactly. Amounts are recorded with 2 fractional digits.

    Args:
        entries: Player entries that passed validation.

    Returns:
        Transfers in the order they were generated. Empty when every
        player broke even.

    Raises:
        UnbalancedSessionError: If the buy-in and cash-out totals differ.
    """
    if not is_balanced(entries):
        total_buy_in, total_cash_out = compute_totals(entries)
        raise UnbalancedSessionError(
            f"Cannot settle unbalanced session: buy-in {total_buy_in}, "
            f"cash-out {total_cash_out}"
        )

    balances = compute_balances(entries)

    # sort() is stable with reverse=True too, so ties keep input order.
    creditors = sorted(
        (b for b in balances if b.net > ZERO), key=lambda b: b.net, reverse=True
    )
    debtors = sorted((b for b in balances if b.net < ZERO), key=lambda b: b.net)

    residuals = [c.net for c in creditors]
    transfers: list[Transfer] = []
    current = 0

    for debtor in debtors:
        remaining = -debtor.net
        while remaining > ZERO and current < len(creditors):
            payment = min(remaining, residuals[current])
            transfers.append(
                Transfer(
                    from_name=debtor.name,
                    to_name=creditors[current].name,
                    amount=round_currency(payment),
                )
            )
            remaining -= payment
            residuals[current] -= payment
            if residuals[current] <= ZERO:
                current += 1

    return transfers

"""Session business logic service.

Ties the pure validator and settlement engine to persistence: a session
is validated, settled, frozen together with its transfers and stored in
one insert. Sessions are never edited afterwards, only deleted.
"""

import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from fastapi import HTTPException, status

from potsettle.dal.sessions_dal import SessionDAL
from potsettle.models.session import PlayerEntry, RawPlayerEntry, Session
from potsettle.models.validation import ValidationResult
from potsettle.services.balance_validator import to_player_entries, validate_session
from potsettle.services.money import total
from potsettle.services.settlement_engine import compute_standings, settle

logger = logging.getLogger("potsettle.services.sessions")


def _raise_validation_error(result: ValidationResult) -> None:
    """Convert a failed ValidationResult into HTTP 422."""
    detail: dict[str, Any] = {
        "error": str(result.status),
        "message": result.message,
    }
    if result.total_buy_in is not None:
        detail["total_buy_in"] = str(result.total_buy_in)
        detail["total_cash_out"] = str(result.total_cash_out)
    raise HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=detail,
    )


def _validated_players(entries: Sequence[RawPlayerEntry]) -> list[PlayerEntry]:
    """Run validate_session and return typed entries, or raise 422."""
    result = validate_session(entries)
    if not result.ok:
        logger.info("Entries rejected: %s", result.status)
        _raise_validation_error(result)
    return to_player_entries(entries)


def preview_settlement(entries: Sequence[RawPlayerEntry]) -> dict[str, Any]:
    """Validate and settle without storing anything.

    Returns:
        A dict with ``transfers`` and ``total_pot``.

    Raises:
        HTTPException 422: Entries failed validation.
    """
    players = _validated_players(entries)
    return {
        "transfers": settle(players),
        "total_pot": total(p.buy_in for p in players),
    }


class SessionService:
    """Service layer for recording, listing and deleting settled sessions."""

    def __init__(self, session_dal: SessionDAL) -> None:
        self._session_dal = session_dal

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _get_session_or_404(self, session_id: str) -> Session:
        """Fetch a session by ID, raising 404 if not found."""
        session = await self._session_dal.get_by_id(session_id)
        if session is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Session not found",
            )
        return session

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def create_session(
        self,
        entries: Sequence[RawPlayerEntry],
        played_at: Optional[datetime] = None,
    ) -> Session:
        """Validate, settle and store a new session.

        Args:
            entries: Raw player rows as entered by the user.
            played_at: Date the game was played (defaults to now).

        Returns:
            The stored Session including its id and transfers.

        Raises:
            HTTPException 422: Entries failed validation.
        """
        players = _validated_players(entries)
        transfers = settle(players)

        fields: dict[str, Any] = {"players": players, "transfers": transfers}
        if played_at is not None:
            fields["played_at"] = played_at
        session = Session(**fields)

        return await self._session_dal.create(session)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_session_detail(self, session_id: str) -> dict[str, Any]:
        """Return a stored session together with its standings table.

        Raises:
            HTTPException 404: Session not found.
        """
        session = await self._get_session_or_404(session_id)
        return {
            "session": session,
            "standings": compute_standings(session.players),
        }

    async def list_sessions(
        self, limit: int = 50, skip: int = 0
    ) -> dict[str, Any]:
        """List session summaries, most recently played first."""
        sessions = await self._session_dal.list_all(limit=limit, skip=skip)
        total_count = await self._session_dal.count_all()
        summaries = [
            {
                "session_id": str(s.id),
                "played_at": s.played_at.isoformat(),
                "player_count": len(s.players),
                "total_pot": str(s.total_pot),
                "transfer_count": len(s.transfers),
            }
            for s in sessions
        ]
        return {"sessions": summaries, "total_count": total_count}

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    async def delete_session(self, session_id: str) -> None:
        """Delete a session wholesale.

        Raises:
            HTTPException 404: Session not found.
        """
        deleted = await self._session_dal.delete(session_id)
        if not deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Session not found",
            )
        logger.info("Session %s deleted", session_id)

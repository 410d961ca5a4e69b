"""Session route handlers.

Endpoints:
    POST   /api/sessions/preview        -- Validate and settle without saving.
    POST   /api/sessions                -- Validate, settle and store a session.
    GET    /api/sessions                -- List session summaries.
    GET    /api/sessions/{session_id}   -- Session detail with standings.
    DELETE /api/sessions/{session_id}   -- Delete a session.
"""

from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, Path, Query, Response, status
from pydantic import BaseModel, Field

from potsettle.config import settings
from potsettle.dal.database import get_database
from potsettle.dal.sessions_dal import SessionDAL
from potsettle.models.common import Money
from potsettle.models.session import (
    PlayerEntry,
    PlayerStanding,
    RawPlayerEntry,
    Session,
    Transfer,
)
from potsettle.services.session_service import SessionService, preview_settlement

router = APIRouter(prefix="/sessions", tags=["Sessions"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _get_service() -> SessionService:
    """Build a SessionService wired to the current database."""
    db = get_database()
    return SessionService(SessionDAL(db))


def _to_response(
    session: Session,
    response_cls: Optional[type["SessionResponse"]] = None,
    **extra: Any,
) -> "SessionResponse":
    """Build a SessionResponse (or subclass) from a stored session."""
    response_cls = response_cls or SessionResponse
    return response_cls(
        session_id=str(session.id),
        played_at=session.played_at.isoformat(),
        created_at=session.created_at.isoformat(),
        players=session.players,
        transfers=session.transfers,
        total_pot=session.total_pot,
        **extra,
    )


# ---------------------------------------------------------------------------
# Pydantic request / response schemas
# ---------------------------------------------------------------------------

class SettleRequest(BaseModel):
    """Request body for POST /api/sessions/preview."""
    players: list[RawPlayerEntry] = Field(
        ..., description="Player rows as entered (name, buy_in, cash_out).",
    )


class CreateSessionRequest(SettleRequest):
    """Request body for POST /api/sessions."""
    played_at: Optional[datetime] = Field(
        default=None, description="Date the game was played (defaults to now).",
    )


class PreviewResponse(BaseModel):
    """Response for POST /api/sessions/preview."""
    transfers: list[Transfer]
    total_pot: Money


class SessionResponse(BaseModel):
    """Response for POST /api/sessions."""
    session_id: str
    played_at: str
    created_at: str
    players: list[PlayerEntry]
    transfers: list[Transfer]
    total_pot: Money


class SessionDetailResponse(SessionResponse):
    """Response for GET /api/sessions/{session_id}."""
    standings: list[PlayerStanding]


class SessionSummary(BaseModel):
    """A single entry in the session list response."""
    session_id: str
    played_at: str
    player_count: int
    total_pot: str
    transfer_count: int


class SessionListResponse(BaseModel):
    """Response for GET /api/sessions."""
    sessions: list[SessionSummary]
    total_count: int


# ---------------------------------------------------------------------------
# POST /api/sessions/preview -- Settle without saving
# ---------------------------------------------------------------------------

@router.post(
    "/preview",
    response_model=PreviewResponse,
    summary="Preview the settlement for a set of players",
)
async def preview_session(body: SettleRequest) -> PreviewResponse:
    """Validate the players and return the transfers. Nothing is stored."""
    result = preview_settlement(body.players)
    return PreviewResponse(**result)


# ---------------------------------------------------------------------------
# POST /api/sessions -- Record a session
# ---------------------------------------------------------------------------

@router.post(
    "",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record and settle a session",
)
async def create_session(body: CreateSessionRequest) -> SessionResponse:
    """Validate, settle and store a session.

    Validation failures return 422 with the failing check in ``detail.error``.
    """
    service = _get_service()
    session = await service.create_session(body.players, played_at=body.played_at)
    return _to_response(session)


# ---------------------------------------------------------------------------
# GET /api/sessions -- List sessions
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=SessionListResponse,
    summary="List recorded sessions",
)
async def list_sessions(
    limit: Optional[int] = Query(default=None, ge=1, le=200),
    skip: int = Query(default=0, ge=0),
) -> SessionListResponse:
    """List session summaries, most recently played first."""
    service = _get_service()
    result = await service.list_sessions(
        limit=limit or settings.SESSIONS_PAGE_LIMIT, skip=skip
    )
    return SessionListResponse(**result)


# ---------------------------------------------------------------------------
# GET /api/sessions/{session_id} -- Session detail
# ---------------------------------------------------------------------------

@router.get(
    "/{session_id}",
    response_model=SessionDetailResponse,
    summary="Get session details",
)
async def get_session(session_id: str = Path(...)) -> SessionDetailResponse:
    """Return the session, its transfers and the standings table."""
    service = _get_service()
    detail = await service.get_session_detail(session_id)
    return _to_response(
        detail["session"],
        SessionDetailResponse,
        standings=detail["standings"],
    )


# ---------------------------------------------------------------------------
# DELETE /api/sessions/{session_id} -- Delete a session
# ---------------------------------------------------------------------------

@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a session",
)
async def delete_session(session_id: str = Path(...)) -> Response:
    """Delete a session and its transfers."""
    service = _get_service()
    await service.delete_session(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

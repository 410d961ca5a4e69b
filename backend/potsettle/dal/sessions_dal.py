"""Session Data Access Layer -- MongoDB operations for the sessions collection.

Sessions are append-only: a document is inserted once with its computed
transfers and later deleted as a whole. There is no update path.
ObjectId handling is transparent: callers pass/receive strings.
"""

import logging
from typing import Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from potsettle.models.session import Session

logger = logging.getLogger("potsettle.dal.sessions")

COLLECTION = "sessions"


class SessionDAL:
    """Data access layer for the sessions collection."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self._collection = db[COLLECTION]

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def create(self, session: Session) -> Session:
        """Insert a new session document and return it with its generated id.

        Args:
            session: A Session model instance (id may be None).

        Returns:
            The Session with its ``id`` populated from the inserted ObjectId.
        """
        doc = session.to_mongo_dict()
        result = await self._collection.insert_one(doc)
        session.id = str(result.inserted_id)
        logger.info(
            "Created session %s with %d players and %d transfers",
            session.id,
            len(session.players),
            len(session.transfers),
        )
        return session

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, session_id: str) -> Optional[Session]:
        """Find a session by its MongoDB ``_id``.

        Returns:
            A Session instance, or None if not found or the id is malformed.
        """
        if not ObjectId.is_valid(session_id):
            return None
        doc = await self._collection.find_one({"_id": ObjectId(session_id)})
        if doc is None:
            return None
        doc["_id"] = str(doc["_id"])
        return Session(**doc)

    async def list_all(
        self,
        limit: int = 50,
        skip: int = 0,
    ) -> list[Session]:
        """List sessions sorted by played_at descending.

        Args:
            limit: Maximum number of results (default 50).
            skip: Number of documents to skip (for pagination).

        Returns:
            A list of Session instances.
        """
        cursor = (
            self._collection.find()
            .sort([("played_at", -1), ("created_at", -1)])
            .skip(skip)
            .limit(limit)
        )
        sessions: list[Session] = []
        async for doc in cursor:
            doc["_id"] = str(doc["_id"])
            sessions.append(Session(**doc))
        return sessions

    async def count_all(self) -> int:
        """Count all sessions in the collection."""
        return await self._collection.count_documents({})

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    async def delete(self, session_id: str) -> bool:
        """Delete a session document by its MongoDB ``_id``.

        Returns:
            True if a document was deleted, False otherwise.
        """
        if not ObjectId.is_valid(session_id):
            return False

        result = await self._collection.delete_one({"_id": ObjectId(session_id)})
        if result.deleted_count > 0:
            logger.info("Deleted session %s", session_id)
        return result.deleted_count > 0

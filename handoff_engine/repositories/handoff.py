"""
MongoDB implementation of the handoff event store.

This repository is both the telemetry sink the engine writes to and the
read side used for handoff history, status and ratings.
"""
import logging
from typing import List, Optional

from handoff_engine.domains.enums import EventType
from handoff_engine.domains.errors import TelemetryError
from handoff_engine.domains.handoff import HandoffEvent, HandoffRating
from handoff_engine.interfaces.providers.data_storage import DataStorageProvider
from handoff_engine.interfaces.providers.telemetry import TelemetrySink
from handoff_engine.interfaces.repositories.handoff import HandoffRepository

logger = logging.getLogger(__name__)

HISTORY_EVENT_TYPES = [EventType.FEATURE_USE.value, EventType.AGENT_LAUNCH.value]


class MongoHandoffRepository(HandoffRepository, TelemetrySink):
    """MongoDB-backed handoff events and ratings."""

    def __init__(self, db_provider: DataStorageProvider):
        """Initialize the handoff repository.

        Args:
            db_provider: Provider for database operations
        """
        self.db = db_provider
        self.collection = "handoff_events"
        self.ratings_collection = "handoff_ratings"

        self.db.create_collection(self.collection)
        self.db.create_collection(self.ratings_collection)

        self.db.create_index(self.collection, [("user_id", 1), ("timestamp", -1)])
        self.db.create_index(self.collection, [("session_id", 1)])
        self.db.create_index(self.collection, [("handoff_id", 1)])
        self.db.create_index(self.ratings_collection, [("handoff_id", 1)])

    async def track_event(self, event: HandoffEvent) -> None:
        """Append a handoff event.

        Raises:
            TelemetryError: If the database write fails
        """
        try:
            self.db.insert_one(self.collection, event.model_dump(mode="json"))
        except Exception as e:
            raise TelemetryError(f"Failed to record {event.event_type.value} event: {e}") from e

    def find_events(
        self,
        user_id: str,
        session_id: Optional[str] = None,
        limit: int = 10,
    ) -> List[HandoffEvent]:
        """Find a user's analysis and launch events, newest first.

        Args:
            user_id: User ID
            session_id: Optional session filter
            limit: Maximum number of events

        Returns:
            List of handoff events
        """
        query = {
            "user_id": user_id,
            "feature_name": "cross_agent_handoff",
            "event_type": {"$in": HISTORY_EVENT_TYPES},
        }
        if session_id:
            query["session_id"] = session_id

        data = self.db.find(
            self.collection, query, sort=[("timestamp", -1)], limit=limit
        )
        return [HandoffEvent(**item) for item in data]

    def find_events_for_handoff(self, handoff_id: str) -> List[HandoffEvent]:
        data = self.db.find(
            self.collection, {"handoff_id": handoff_id}, sort=[("timestamp", 1)]
        )
        return [HandoffEvent(**item) for item in data]

    def save_rating(self, rating: HandoffRating) -> str:
        return self.db.insert_one(self.ratings_collection, rating.model_dump(mode="json"))

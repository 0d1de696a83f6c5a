from abc import ABC, abstractmethod
from typing import List, Optional

from handoff_engine.domains.handoff import HandoffEvent, HandoffRating


class HandoffRepository(ABC):
    """Interface for reading handoff history and storing ratings."""

    @abstractmethod
    def find_events(
        self,
        user_id: str,
        session_id: Optional[str] = None,
        limit: int = 10,
    ) -> List[HandoffEvent]:
        """Find a user's handoff events, newest first."""
        pass

    @abstractmethod
    def find_events_for_handoff(self, handoff_id: str) -> List[HandoffEvent]:
        """Find all events recorded for one handoff, oldest first."""
        pass

    @abstractmethod
    def save_rating(self, rating: HandoffRating) -> str:
        """Store a handoff rating and return its id."""
        pass

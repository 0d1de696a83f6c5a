from abc import ABC, abstractmethod
from typing import Any, Optional

from handoff_engine.domains.enums import HandoffState
from handoff_engine.domains.handoff import (
    ExecutionResult,
    HandoffContext,
    HandoffResult,
    HistoryResult,
    OperationResult,
)


class HandoffService(ABC):
    """Interface for the cross-agent handoff operations."""

    @abstractmethod
    async def analyze_handoff_intent(
        self, context: HandoffContext, timeout: Optional[float] = None
    ) -> HandoffResult:
        """Recommend target agents (and possibly a workflow chain)."""
        pass

    @abstractmethod
    async def execute_handoff(
        self,
        handoff_id: str,
        target_agent_id: str,
        context: HandoffContext,
        workflow_data: Any = None,
        timeout: Optional[float] = None,
    ) -> ExecutionResult:
        """Record a handoff and trigger the target agent's workflow."""
        pass

    @abstractmethod
    async def get_handoff_history(
        self, user_id: str, session_id: Optional[str] = None, limit: int = 10
    ) -> HistoryResult:
        """Get recorded handoff events for a user."""
        pass

    @abstractmethod
    async def rate_handoff(
        self, handoff_id: str, rating: int, feedback: Optional[str] = None
    ) -> OperationResult:
        """Record user feedback on a handoff."""
        pass

    @abstractmethod
    async def get_handoff_status(self, handoff_id: str) -> Optional[HandoffState]:
        """Get the latest recorded state of a handoff."""
        pass

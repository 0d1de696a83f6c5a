"""
Exceptions raised inside the handoff engine.

These never cross the public service boundary: HandoffService catches them
and returns a failure result carrying ``exc.kind``.
"""
from typing import Optional

from handoff_engine.domains.enums import HandoffErrorKind


class HandoffError(Exception):
    """Base class for handoff engine errors."""

    kind: HandoffErrorKind = HandoffErrorKind.EXECUTION_FAILURE

    def __init__(self, message: str, kind: Optional[HandoffErrorKind] = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class InvalidTierError(HandoffError, ValueError):
    """Raised when a tier string is not part of the tier hierarchy."""

    kind = HandoffErrorKind.INVALID_TIER

    def __init__(self, tier: Optional[str]):
        self.tier = tier
        super().__init__(f"Unknown tier '{tier}'")


class SourceAgentNotFoundError(HandoffError):
    """Raised when the agent handing off is not in the catalog."""

    kind = HandoffErrorKind.SOURCE_AGENT_NOT_FOUND

    def __init__(self, agent_id: str):
        self.agent_id = agent_id
        super().__init__(f"Source agent '{agent_id}' not found")


class NoCandidateError(HandoffError):
    """Raised when no agent reaches the inclusion threshold."""

    kind = HandoffErrorKind.NO_CANDIDATE

    def __init__(self, message: str, excluded: Optional[list] = None):
        super().__init__(message)
        self.excluded = list(excluded or [])


class TelemetryError(HandoffError):
    """Raised by telemetry sinks when an event cannot be written."""

    kind = HandoffErrorKind.TELEMETRY_FAILURE


class ExecutionError(HandoffError):
    """Raised when the downstream workflow trigger rejects a handoff."""

    kind = HandoffErrorKind.EXECUTION_FAILURE

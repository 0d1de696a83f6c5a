"""
Common enumerations used across the handoff engine.
"""
from enum import Enum


class HandoffType(str, Enum):
    """How the target agent picks up the work."""
    SEQUENTIAL = "sequential"
    PARALLEL = "parallel"
    CONDITIONAL = "conditional"


class WorkflowStyle(str, Enum):
    """User preference for how a multi-agent workflow should run."""
    FAST = "fast"
    THOROUGH = "thorough"
    CREATIVE = "creative"


class HandoffState(str, Enum):
    """Lifecycle of a single handoff request."""
    ANALYZING = "analyzing"
    RECOMMENDED = "recommended"
    REJECTED = "rejected"
    EXECUTING = "executing"
    EXECUTED = "executed"
    FAILED = "failed"


class HandoffErrorKind(str, Enum):
    """Error codes returned by the public handoff operations."""
    SOURCE_AGENT_NOT_FOUND = "SourceAgentNotFound"
    NO_CANDIDATE = "NoCandidate"
    INVALID_TIER = "InvalidTier"
    TELEMETRY_FAILURE = "TelemetryFailure"
    EXECUTION_FAILURE = "ExecutionFailure"
    INVALID_RATING = "InvalidRating"
    HISTORY_UNAVAILABLE = "HistoryUnavailable"
    INVALID_REQUEST = "InvalidRequest"
    INTERNAL_ERROR = "InternalError"


class EventType(str, Enum):
    """Telemetry event types written by the engine."""
    FEATURE_USE = "feature_use"
    AGENT_LAUNCH = "agent_launch"
    HANDOFF_RATED = "handoff_rated"

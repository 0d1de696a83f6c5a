"""
Handoff domain models.

These models describe a handoff request, the recommendations produced for
it, workflow chains, and the records written to telemetry.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from handoff_engine.domains.enums import (
    EventType,
    HandoffState,
    HandoffType,
    WorkflowStyle,
)
from handoff_engine.domains.payloads import WorkflowPayload, coerce_payload


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UserPreferences(BaseModel):
    """Explicit user preferences for agent selection."""
    preferred_agents: List[str] = Field(default_factory=list)
    avoided_agents: List[str] = Field(default_factory=list)
    workflow_style: Optional[WorkflowStyle] = None


class SessionContext(BaseModel):
    """Caller-supplied session state; the engine keeps no copy of it."""
    user_id: str = Field(..., description="User identifier")
    session_id: str = Field(..., description="Session identifier")
    user_tier: str = Field(..., description="User's access tier")
    previous_agents: List[str] = Field(
        default_factory=list,
        description="Agents already visited in this session, oldest first")
    total_handoffs: int = Field(0, ge=0, description="Handoffs so far")


class HandoffContext(BaseModel):
    """Everything needed to analyze one handoff request."""
    source_agent_id: str = Field(..., description="Agent handing off")
    user_intent: str = Field(..., description="Free-text user intent")
    target_agent_id: Optional[str] = Field(
        None, description="Agent explicitly requested by the user")
    user_preferences: Optional[UserPreferences] = None
    workflow_data: Optional[WorkflowPayload] = Field(
        None, description="Current workflow payload")
    session_context: SessionContext

    @field_validator("workflow_data", mode="before")
    @classmethod
    def coerce_workflow_data(cls, v: Any) -> Any:
        """Accept untyped dicts by wrapping them as opaque payloads."""
        return coerce_payload(v)

    @property
    def preferred_agents(self) -> List[str]:
        return self.user_preferences.preferred_agents if self.user_preferences else []

    @property
    def avoided_agents(self) -> List[str]:
        return self.user_preferences.avoided_agents if self.user_preferences else []

    @property
    def workflow_style(self) -> Optional[WorkflowStyle]:
        return self.user_preferences.workflow_style if self.user_preferences else None


class HandoffRecommendation(BaseModel):
    """A scored candidate agent for a handoff."""

    model_config = ConfigDict(frozen=True)

    agent_id: str
    agent_name: str
    superhero_name: str
    confidence: int = Field(..., ge=0, le=100,
                            description="Fitness score (0-100)")
    reasoning: str = Field("", description="Signals that fired, for display")
    estimated_duration: int = Field(..., description="Estimated minutes")
    required_tier: str
    handoff_type: HandoffType
    prerequisites: List[str] = Field(default_factory=list)
    expected_outputs: List[str] = Field(default_factory=list)


class ChainStep(BaseModel):
    """One agent's position in a workflow chain."""

    model_config = ConfigDict(frozen=True)

    agent_id: str
    order: int = Field(..., ge=1)
    parallel_with: List[str] = Field(default_factory=list)
    conditions: List[str] = Field(default_factory=list)
    output_mapping: Dict[str, str] = Field(default_factory=dict)


class WorkflowChain(BaseModel):
    """A predefined multi-agent workflow."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    steps: List[ChainStep]
    estimated_duration: int = Field(..., description="Estimated minutes")
    required_tier: str
    success_rate: float = Field(..., ge=0, le=100)
    user_rating: float = Field(..., ge=0, le=5)
    keywords: List[str] = Field(
        default_factory=list,
        description="Intent keywords that make this chain relevant")

    @field_validator("steps")
    @classmethod
    def steps_not_empty(cls, v: List[ChainStep]) -> List[ChainStep]:
        if not v:
            raise ValueError("A workflow chain needs at least one step")
        return v

    @property
    def agent_ids(self) -> List[str]:
        """Agent ids in step order, without duplicates."""
        seen: List[str] = []
        for step in sorted(self.steps, key=lambda s: s.order):
            if step.agent_id not in seen:
                seen.append(step.agent_id)
        return seen


class ExcludedCandidate(BaseModel):
    """A candidate dropped before scoring could complete."""
    agent_id: str
    reason: str


class HandoffResult(BaseModel):
    """Outcome of analyzing a handoff request."""
    success: bool
    handoff_id: str
    state: HandoffState
    target_agent: Optional[HandoffRecommendation] = None
    alternative_agents: List[HandoffRecommendation] = Field(default_factory=list)
    recommendations: List[HandoffRecommendation] = Field(
        default_factory=list,
        description="Full ranked list (at most 8), best first")
    workflow_chain: Optional[WorkflowChain] = None
    excluded_agents: List[ExcludedCandidate] = Field(default_factory=list)
    error: Optional[str] = Field(None, description="Error kind code")
    message: Optional[str] = Field(None, description="Human-readable error")
    telemetry_error: Optional[str] = None


class ExecutionResult(BaseModel):
    """Outcome of executing a handoff."""
    success: bool
    handoff_id: str
    state: HandoffState
    execution_id: Optional[str] = None
    execution_handle: Any = Field(
        None, description="Opaque handle returned by the workflow trigger")
    error: Optional[str] = None
    message: Optional[str] = None
    telemetry_error: Optional[str] = None


class HandoffEvent(BaseModel):
    """Append-only audit record of a handoff decision, execution or rating."""
    event_type: EventType
    user_id: Optional[str] = None
    session_id: Optional[str] = None
    agent_id: Optional[str] = None
    feature_name: str = "cross_agent_handoff"
    handoff_id: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=utc_now)


class HandoffRating(BaseModel):
    """User feedback on a completed handoff."""
    handoff_id: str
    rating: int = Field(..., ge=1, le=5)
    feedback: Optional[str] = None
    timestamp: datetime = Field(default_factory=utc_now)


class OperationResult(BaseModel):
    """Success/failure result for operations without a payload."""
    success: bool
    error: Optional[str] = None
    message: Optional[str] = None
    telemetry_error: Optional[str] = None


class HistoryResult(BaseModel):
    """Handoff events for a user, newest first."""
    success: bool
    events: List[HandoffEvent] = Field(default_factory=list)
    error: Optional[str] = None
    message: Optional[str] = None

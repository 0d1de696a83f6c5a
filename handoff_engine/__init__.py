"""
Handoff Engine - cross-agent handoff and workflow orchestration.

This package scores which agent should continue a user's work, assembles
multi-agent workflow chains, and records and triggers the chosen handoff.
"""

# Client interface (main entry point)
from handoff_engine.client.handoff_engine import HandoffEngine

# Factory for wiring the engine
from handoff_engine.factories.handoff_factory import HandoffEngineFactory

# Service and request/response types
from handoff_engine.services.handoff import HandoffService
from handoff_engine.domains.handoff import (
    HandoffContext,
    HandoffResult,
    ExecutionResult,
    SessionContext,
    UserPreferences,
)

# Package metadata
__all__ = [
    # Main client interfaces
    "HandoffEngine",
    # Factories
    "HandoffEngineFactory",
    # Services
    "HandoffService",
    # Types
    "HandoffContext",
    "HandoffResult",
    "ExecutionResult",
    "SessionContext",
    "UserPreferences",
]

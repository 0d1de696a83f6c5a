"""
Simplified client interface for the handoff engine.

This module provides a clean API for host applications to analyze and
execute handoffs without wiring the engine's services themselves.
"""

import json
import importlib.util
import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from handoff_engine.domains.agents import Agent
from handoff_engine.domains.enums import HandoffErrorKind, HandoffState
from handoff_engine.domains.handoff import (
    ExecutionResult,
    HandoffContext,
    HandoffResult,
    HistoryResult,
    OperationResult,
)
from handoff_engine.factories.handoff_factory import HandoffEngineFactory
from handoff_engine.services.handoff import new_handoff_id

logger = logging.getLogger(__name__)


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from a JSON file or a Python file defining ``config``."""
    if config_path.endswith(".json"):
        with open(config_path, "r") as f:
            return json.load(f)

    spec = importlib.util.spec_from_file_location("config", config_path)
    if spec is None or spec.loader is None:
        raise FileNotFoundError(config_path)
    config_module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(config_module)
    return config_module.config


class HandoffEngine:
    """Simplified client interface for cross-agent handoffs."""

    def __init__(self, config_path: str = None, config: Dict[str, Any] = None):
        """Initialize the engine from a config file or dictionary.

        Args:
            config_path: Path to configuration file (JSON or Python)
            config: Configuration dictionary
        """
        if config is None and not config_path:
            raise ValueError("Either config or config_path must be provided")

        if config_path:
            config = load_config(config_path)

        self.handoff_service = HandoffEngineFactory.create_from_config(config)

    @staticmethod
    def _context(context: Union[HandoffContext, Dict[str, Any]]) -> HandoffContext:
        """Validate a request dict.

        Raises:
            ValidationError: If the dict is not a valid HandoffContext
        """
        if isinstance(context, HandoffContext):
            return context
        return HandoffContext.model_validate(context)

    def list_agents(self) -> List[Agent]:
        return self.handoff_service.catalog.get_all_agents()

    async def analyze(
        self,
        context: Union[HandoffContext, Dict[str, Any]],
        timeout: Optional[float] = None,
    ) -> HandoffResult:
        """Analyze a handoff request.

        Args:
            context: HandoffContext or an equivalent dict
            timeout: Optional deadline for telemetry, in seconds

        Returns:
            HandoffResult; an invalid request dict yields InvalidRequest
        """
        try:
            context = self._context(context)
        except ValidationError as e:
            handoff_id = new_handoff_id()
            logger.warning(f"Rejected invalid handoff request {handoff_id}: {e}")
            return HandoffResult(
                success=False,
                handoff_id=handoff_id,
                state=HandoffState.REJECTED,
                error=HandoffErrorKind.INVALID_REQUEST.value,
                message=str(e),
            )
        return await self.handoff_service.analyze_handoff_intent(context, timeout=timeout)

    async def execute(
        self,
        handoff_id: str,
        target_agent_id: str,
        context: Union[HandoffContext, Dict[str, Any]],
        workflow_data: Any = None,
        timeout: Optional[float] = None,
    ) -> ExecutionResult:
        """Execute a previously analyzed handoff."""
        try:
            context = self._context(context)
        except ValidationError as e:
            logger.warning(f"Rejected invalid execution request for handoff {handoff_id}: {e}")
            return ExecutionResult(
                success=False,
                handoff_id=handoff_id,
                state=HandoffState.FAILED,
                error=HandoffErrorKind.INVALID_REQUEST.value,
                message=str(e),
            )
        return await self.handoff_service.execute_handoff(
            handoff_id,
            target_agent_id,
            context,
            workflow_data,
            timeout=timeout,
        )

    async def history(
        self, user_id: str, session_id: Optional[str] = None, limit: int = 10
    ) -> HistoryResult:
        return await self.handoff_service.get_handoff_history(user_id, session_id, limit)

    async def rate(
        self, handoff_id: str, rating: int, feedback: Optional[str] = None
    ) -> OperationResult:
        return await self.handoff_service.rate_handoff(handoff_id, rating, feedback)

    async def status(self, handoff_id: str) -> Optional[HandoffState]:
        return await self.handoff_service.get_handoff_status(handoff_id)

"""
Handoff execution and telemetry.

The executor records handoff decisions and launches, and passes executions
on to the workflow trigger. It never runs an agent's business logic and
never waits for the target agent to finish.
"""
import asyncio
import logging
from typing import Any, Awaitable, Optional

from handoff_engine.adapters.telemetry_adapter import LoggingTelemetrySink
from handoff_engine.adapters.workflow_adapter import NullWorkflowTrigger
from handoff_engine.domains.enums import EventType, HandoffErrorKind, HandoffState
from handoff_engine.domains.errors import ExecutionError
from handoff_engine.domains.handoff import (
    ExecutionResult,
    HandoffContext,
    HandoffEvent,
    HandoffRating,
    HandoffResult,
)
from handoff_engine.domains.payloads import coerce_payload
from handoff_engine.interfaces.providers.telemetry import TelemetrySink
from handoff_engine.interfaces.providers.workflow import WorkflowTrigger

logger = logging.getLogger(__name__)

MAX_INTENT_LENGTH = 200


def execution_id_for(handoff_id: str, target_agent_id: str) -> str:
    return f"exec_{handoff_id}_{target_agent_id}"


async def _with_timeout(awaitable: Awaitable, timeout: Optional[float]) -> Any:
    if timeout is None:
        return await awaitable
    return await asyncio.wait_for(awaitable, timeout)


class HandoffExecutor:
    """Emits handoff telemetry and triggers target workflows."""

    def __init__(
        self,
        telemetry: Optional[TelemetrySink] = None,
        trigger: Optional[WorkflowTrigger] = None,
    ):
        """Initialize the executor.

        Args:
            telemetry: Event sink (logging-only sink by default)
            trigger: Downstream workflow trigger (no-op trigger by default)
        """
        self.telemetry = telemetry or LoggingTelemetrySink()
        self.trigger = trigger or NullWorkflowTrigger()

    async def emit(self, event: HandoffEvent, timeout: Optional[float] = None) -> Optional[str]:
        """Write an event, best effort.

        Returns:
            None on success, otherwise a description of the telemetry failure
        """
        try:
            await _with_timeout(self.telemetry.track_event(event), timeout)
        except Exception as e:
            logger.warning(
                f"Telemetry failure for {event.event_type.value} event of handoff {event.handoff_id}: {e!r}"
            )
            return f"{HandoffErrorKind.TELEMETRY_FAILURE.value}: {e}"
        return None

    async def record_analysis(
        self, context: HandoffContext, result: HandoffResult, timeout: Optional[float] = None
    ) -> Optional[str]:
        """Record the handoff decision for a successful analysis."""
        best = result.target_agent
        session = context.session_context
        event = HandoffEvent(
            event_type=EventType.FEATURE_USE,
            user_id=session.user_id,
            session_id=session.session_id,
            agent_id=context.source_agent_id,
            handoff_id=result.handoff_id,
            metadata={
                "target_agent": best.agent_id if best else None,
                "confidence": best.confidence if best else None,
                "handoff_type": best.handoff_type.value if best else None,
                "user_intent": context.user_intent[:MAX_INTENT_LENGTH],
                "handoff_id": result.handoff_id,
                "alternative_agents": [a.agent_id for a in result.alternative_agents],
                "workflow_chain": result.workflow_chain.id if result.workflow_chain else None,
            },
        )
        return await self.emit(event, timeout)

    async def record_rating(
        self, rating: HandoffRating, timeout: Optional[float] = None
    ) -> Optional[str]:
        event = HandoffEvent(
            event_type=EventType.HANDOFF_RATED,
            handoff_id=rating.handoff_id,
            metadata={
                "handoff_id": rating.handoff_id,
                "rating": rating.rating,
                "feedback": rating.feedback,
            },
        )
        return await self.emit(event, timeout)

    async def execute(
        self,
        handoff_id: str,
        target_agent_id: str,
        context: HandoffContext,
        workflow_data: Any = None,
        timeout: Optional[float] = None,
    ) -> ExecutionResult:
        """Trigger the target workflow, record the launch and return.

        Args:
            handoff_id: Id returned by the analysis
            target_agent_id: Agent chosen by the caller
            context: Handoff request the analysis ran on
            workflow_data: Payload for the target (defaults to the context's)
            timeout: Optional per-call deadline for the trigger and telemetry

        Returns:
            ExecutionResult; a rejected trigger yields ExecutionFailure
        """
        execution_id = execution_id_for(handoff_id, target_agent_id)
        payload = coerce_payload(
            workflow_data if workflow_data is not None else context.workflow_data
        )
        session = context.session_context
        logger.info(
            f"Executing handoff {handoff_id}: {context.source_agent_id} -> {target_agent_id} "
            f"(session {session.session_id})"
        )

        try:
            handle = await _with_timeout(
                self.trigger.trigger_workflow(target_agent_id, execution_id, payload),
                timeout,
            )
        except ExecutionError as e:
            logger.error(f"Workflow trigger rejected {execution_id}: {e}")
            return ExecutionResult(
                success=False,
                handoff_id=handoff_id,
                state=HandoffState.FAILED,
                error=HandoffErrorKind.EXECUTION_FAILURE.value,
                message=str(e),
            )
        except asyncio.TimeoutError:
            logger.error(f"Workflow trigger timed out for {execution_id}")
            return ExecutionResult(
                success=False,
                handoff_id=handoff_id,
                state=HandoffState.FAILED,
                error=HandoffErrorKind.EXECUTION_FAILURE.value,
                message=f"Workflow trigger timed out after {timeout}s",
            )

        event = HandoffEvent(
            event_type=EventType.AGENT_LAUNCH,
            user_id=session.user_id,
            session_id=session.session_id,
            agent_id=target_agent_id,
            handoff_id=handoff_id,
            metadata={
                "handoff_id": handoff_id,
                "source_agent": context.source_agent_id,
                "handoff_type": "cross_agent",
                "execution_id": execution_id,
                "workflow_data": payload.field_names() if payload else [],
                "payload_kind": payload.kind if payload else None,
            },
        )
        telemetry_error = await self.emit(event, timeout)

        return ExecutionResult(
            success=True,
            handoff_id=handoff_id,
            state=HandoffState.EXECUTED,
            execution_id=execution_id,
            execution_handle=handle,
            telemetry_error=telemetry_error,
        )

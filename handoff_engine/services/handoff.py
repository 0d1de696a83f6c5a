"""
Handoff service implementation.

This service is the public surface of the engine: it analyzes handoff
intent, executes chosen handoffs, and exposes handoff history and ratings.
Every operation returns a result object; errors never propagate to the
caller.
"""
import logging
import uuid
from typing import Any, Callable, Optional

from handoff_engine.domains.enums import EventType, HandoffErrorKind, HandoffState
from handoff_engine.domains.errors import (
    HandoffError,
    NoCandidateError,
    SourceAgentNotFoundError,
)
from handoff_engine.domains.handoff import (
    ExecutionResult,
    HandoffContext,
    HandoffRating,
    HandoffResult,
    HistoryResult,
    OperationResult,
)
from handoff_engine.interfaces.providers.catalog import AgentCatalogProvider
from handoff_engine.interfaces.repositories.handoff import HandoffRepository
from handoff_engine.interfaces.services.handoff import (
    HandoffService as HandoffServiceInterface,
)
from handoff_engine.services.chains import WorkflowChainMatcher
from handoff_engine.services.executor import HandoffExecutor
from handoff_engine.services.ranking import RecommendationRanker

logger = logging.getLogger(__name__)

MAX_HISTORY_LIMIT = 100


def new_handoff_id() -> str:
    return f"handoff_{uuid.uuid4().hex}"


class HandoffService(HandoffServiceInterface):
    """Service for analyzing and executing cross-agent handoffs."""

    def __init__(
        self,
        catalog: AgentCatalogProvider,
        ranker: Optional[RecommendationRanker] = None,
        chain_matcher: Optional[WorkflowChainMatcher] = None,
        executor: Optional[HandoffExecutor] = None,
        repository: Optional[HandoffRepository] = None,
        id_factory: Callable[[], str] = new_handoff_id,
    ):
        """Initialize the handoff service.

        Args:
            catalog: Agent catalog
            ranker: Recommendation ranker
            chain_matcher: Workflow chain matcher
            executor: Executor for telemetry and workflow triggers
            repository: Optional handoff event store for history and ratings
            id_factory: Generator for handoff ids
        """
        self.catalog = catalog
        self.ranker = ranker or RecommendationRanker()
        self.chain_matcher = chain_matcher or WorkflowChainMatcher()
        self.executor = executor or HandoffExecutor()
        self.repository = repository
        self.id_factory = id_factory

    async def analyze_handoff_intent(
        self, context: HandoffContext, timeout: Optional[float] = None
    ) -> HandoffResult:
        """Analyze user intent and recommend the best agent handoff.

        Args:
            context: Handoff request
            timeout: Optional deadline for the telemetry write, in seconds

        Returns:
            HandoffResult with the best recommendation, up to three
            alternatives and an optional workflow chain, or a failure
        """
        handoff_id = self.id_factory()
        logger.info(
            f"Analyzing handoff {handoff_id} from {context.source_agent_id} "
            f"(session {context.session_context.session_id})"
        )

        try:
            source_agent = self.catalog.get_agent(context.source_agent_id)
            if source_agent is None:
                raise SourceAgentNotFoundError(context.source_agent_id)

            ranking = self.ranker.rank(context, self.catalog.get_all_agents(), source_agent)
            chain = self.chain_matcher.match_chain(context, ranking.recommendations)
        except HandoffError as e:
            logger.info(f"Handoff {handoff_id} rejected: {e.kind.value}: {e}")
            return HandoffResult(
                success=False,
                handoff_id=handoff_id,
                state=HandoffState.REJECTED,
                excluded_agents=e.excluded if isinstance(e, NoCandidateError) else [],
                error=e.kind.value,
                message=str(e),
            )
        except Exception as e:
            logger.exception(f"Unexpected error analyzing handoff {handoff_id}: {e}")
            return HandoffResult(
                success=False,
                handoff_id=handoff_id,
                state=HandoffState.REJECTED,
                error=HandoffErrorKind.INTERNAL_ERROR.value,
                message=str(e),
            )

        result = HandoffResult(
            success=True,
            handoff_id=handoff_id,
            state=HandoffState.RECOMMENDED,
            target_agent=ranking.best,
            alternative_agents=ranking.alternatives,
            recommendations=ranking.recommendations,
            workflow_chain=chain,
            excluded_agents=ranking.excluded,
        )
        telemetry_error = await self.executor.record_analysis(context, result, timeout)
        if telemetry_error:
            result = result.model_copy(update={"telemetry_error": telemetry_error})
        return result

    async def execute_handoff(
        self,
        handoff_id: str,
        target_agent_id: str,
        context: HandoffContext,
        workflow_data: Any = None,
        timeout: Optional[float] = None,
    ) -> ExecutionResult:
        """Execute a handoff to another agent.

        Args:
            handoff_id: Id from a previous analysis
            target_agent_id: Agent to hand off to
            context: Handoff request
            workflow_data: Optional payload for the target agent
            timeout: Optional per-call deadline for the trigger and telemetry

        Returns:
            ExecutionResult with execution_id on success
        """
        try:
            return await self.executor.execute(
                handoff_id, target_agent_id, context, workflow_data, timeout
            )
        except Exception as e:
            logger.exception(f"Error executing handoff {handoff_id}: {e}")
            return ExecutionResult(
                success=False,
                handoff_id=handoff_id,
                state=HandoffState.FAILED,
                error=HandoffErrorKind.EXECUTION_FAILURE.value,
                message=str(e),
            )

    async def get_handoff_history(
        self, user_id: str, session_id: Optional[str] = None, limit: int = 10
    ) -> HistoryResult:
        """Get handoff events for a user session, newest first.

        Returns an empty history when no event store is configured.
        """
        if self.repository is None:
            return HistoryResult(success=True, events=[])

        limit = max(1, min(limit, MAX_HISTORY_LIMIT))
        try:
            events = self.repository.find_events(user_id, session_id, limit)
        except Exception as e:
            logger.error(f"Error reading handoff history for {user_id}: {e}")
            return HistoryResult(
                success=False,
                error=HandoffErrorKind.HISTORY_UNAVAILABLE.value,
                message=str(e),
            )
        return HistoryResult(success=True, events=events)

    async def rate_handoff(
        self, handoff_id: str, rating: int, feedback: Optional[str] = None
    ) -> OperationResult:
        """Rate a handoff experience.

        Args:
            handoff_id: Handoff being rated
            rating: Score from 1 to 5
            feedback: Optional free-text feedback

        Returns:
            OperationResult
        """
        if not isinstance(rating, int) or isinstance(rating, bool) or not 1 <= rating <= 5:
            return OperationResult(
                success=False,
                error=HandoffErrorKind.INVALID_RATING.value,
                message=f"Rating must be an integer from 1 to 5, got {rating!r}",
            )

        record = HandoffRating(handoff_id=handoff_id, rating=rating, feedback=feedback)
        if self.repository is not None:
            try:
                self.repository.save_rating(record)
            except Exception as e:
                logger.error(f"Error saving rating for handoff {handoff_id}: {e}")
                return OperationResult(
                    success=False,
                    error=HandoffErrorKind.TELEMETRY_FAILURE.value,
                    message=str(e),
                )

        telemetry_error = await self.executor.record_rating(record)
        logger.info(f"Handoff {handoff_id} rated {rating}")
        return OperationResult(success=True, telemetry_error=telemetry_error)

    async def get_handoff_status(self, handoff_id: str) -> Optional[HandoffState]:
        """Get the latest recorded state of a handoff.

        Returns:
            EXECUTED once a launch was recorded, RECOMMENDED after an
            analysis, or None if nothing was recorded
        """
        if self.repository is None:
            return None
        try:
            events = self.repository.find_events_for_handoff(handoff_id)
        except Exception as e:
            logger.error(f"Error reading events for handoff {handoff_id}: {e}")
            return None

        event_types = {event.event_type for event in events}
        if EventType.AGENT_LAUNCH in event_types:
            return HandoffState.EXECUTED
        if EventType.FEATURE_USE in event_types:
            return HandoffState.RECOMMENDED
        return None

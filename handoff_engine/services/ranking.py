"""
Ranking of scored handoff candidates into recommendations.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from handoff_engine.domains.agents import Agent, Tier
from handoff_engine.domains.enums import HandoffType, WorkflowStyle
from handoff_engine.domains.errors import InvalidTierError, NoCandidateError
from handoff_engine.domains.handoff import (
    ExcludedCandidate,
    HandoffContext,
    HandoffRecommendation,
)
from handoff_engine.services.scoring import ConfidenceScorer

logger = logging.getLogger(__name__)

INCLUSION_THRESHOLD = 30
MAX_RECOMMENDATIONS = 8
MAX_ALTERNATIVES = 3
DEFAULT_DURATION = 10

CATEGORY_DURATIONS: Dict[str, int] = {
    "Content Creation": 15,
    "Marketing": 10,
    "Analytics": 5,
    "Design": 20,
    "Development": 30,
    "Strategy": 12,
}

CONDITIONAL_CATEGORIES = {"Analytics", "Strategy"}

AGENT_PREREQUISITES: Dict[str, List[str]] = {
    "seo-specialist": ["Website content", "Target keywords"],
    "social-media-manager": ["Brand guidelines", "Content calendar"],
    "email-marketer": ["Email list", "Campaign objectives"],
}

AGENT_EXPECTED_OUTPUTS: Dict[str, List[str]] = {
    "content-creator": ["Blog posts", "Articles", "Copy"],
    "social-media-manager": ["Social posts", "Content calendar", "Engagement strategy"],
    "seo-specialist": ["SEO audit", "Keyword strategy", "Optimization recommendations"],
}


@dataclass(frozen=True)
class Ranking:
    """Ordered recommendations plus the candidates that could not be scored."""
    recommendations: List[HandoffRecommendation]
    excluded: List[ExcludedCandidate] = field(default_factory=list)

    @property
    def best(self) -> HandoffRecommendation:
        return self.recommendations[0]

    @property
    def alternatives(self) -> List[HandoffRecommendation]:
        return self.recommendations[1:1 + MAX_ALTERNATIVES]


def estimate_duration(agent: Agent) -> int:
    return CATEGORY_DURATIONS.get(agent.category, DEFAULT_DURATION)


def determine_handoff_type(context: HandoffContext, agent: Agent) -> HandoffType:
    """Pick how the agent joins the workflow.

    A "fast" workflow style runs agents in parallel; otherwise analytics and
    strategy agents run conditionally and everything else sequentially.
    """
    if context.workflow_style == WorkflowStyle.FAST:
        return HandoffType.PARALLEL
    if agent.category in CONDITIONAL_CATEGORIES:
        return HandoffType.CONDITIONAL
    return HandoffType.SEQUENTIAL


class RecommendationRanker:
    """Filters, scores, sorts and truncates handoff candidates."""

    def __init__(
        self,
        scorer: Optional[ConfidenceScorer] = None,
        threshold: int = INCLUSION_THRESHOLD,
        max_recommendations: int = MAX_RECOMMENDATIONS,
    ):
        self.scorer = scorer or ConfidenceScorer()
        self.threshold = threshold
        self.max_recommendations = max_recommendations

    def _build(
        self, context: HandoffContext, agent: Agent, confidence: int, reasoning: str
    ) -> HandoffRecommendation:
        return HandoffRecommendation(
            agent_id=agent.id,
            agent_name=agent.name,
            superhero_name=agent.display_name,
            confidence=confidence,
            reasoning=reasoning,
            estimated_duration=estimate_duration(agent),
            required_tier=agent.required_tier,
            handoff_type=determine_handoff_type(context, agent),
            prerequisites=list(AGENT_PREREQUISITES.get(agent.id, [])),
            expected_outputs=list(AGENT_EXPECTED_OUTPUTS.get(agent.id, [])),
        )

    def rank(
        self,
        context: HandoffContext,
        agents: Iterable[Agent],
        source_agent: Optional[Agent] = None,
    ) -> Ranking:
        """Rank every eligible agent for a handoff.

        Args:
            context: Handoff request
            agents: Candidate agents (usually the whole catalog)
            source_agent: Agent handing off

        Returns:
            Ranking with recommendations ordered by confidence, then agent id

        Raises:
            InvalidTierError: If the user's tier is unknown
            NoCandidateError: If no agent reaches the inclusion threshold
        """
        Tier.parse(context.session_context.user_tier)

        skip = set(context.session_context.previous_agents)
        skip.add(context.source_agent_id)

        candidates: List[HandoffRecommendation] = []
        excluded: List[ExcludedCandidate] = []
        for agent in agents:
            if agent.id in skip:
                continue
            try:
                confidence, reasoning = self.scorer.score(context, agent, source_agent)
            except InvalidTierError as e:
                logger.warning(f"Excluding {agent.id} from handoff: {e}")
                excluded.append(ExcludedCandidate(agent_id=agent.id, reason=f"InvalidTier: {e}"))
                continue
            if confidence < self.threshold:
                logger.debug(f"{agent.id} below threshold ({confidence} < {self.threshold})")
                continue
            candidates.append(self._build(context, agent, confidence, reasoning))

        if not candidates:
            raise NoCandidateError(
                f"No agent reached the confidence threshold of {self.threshold} "
                f"for a handoff from '{context.source_agent_id}'",
                excluded=excluded,
            )

        candidates.sort(key=lambda r: (-r.confidence, r.agent_id))
        return Ranking(
            recommendations=candidates[:self.max_recommendations],
            excluded=excluded,
        )

"""
Confidence scoring for handoff candidates.
"""
import logging
import math
from typing import List, Optional, Tuple

from handoff_engine.domains.agents import Agent, tier_allows
from handoff_engine.domains.handoff import HandoffContext
from handoff_engine.interfaces.providers.metrics import SuccessRateProvider
from handoff_engine.interfaces.services.matching import CapabilityMatcher
from handoff_engine.services.capability import KeywordCapabilityMatcher

logger = logging.getLogger(__name__)

COMPLEMENTARY_CATEGORY_BONUS = 30
CAPABILITY_WEIGHT = 0.4
PREFERRED_AGENT_BONUS = 20
AVOIDED_AGENT_PENALTY = 30
TIER_COMPATIBLE_BONUS = 10
TIER_MISMATCH_PENALTY = 50
SUCCESS_RATE_WEIGHT = 0.1
DEFAULT_SUCCESS_RATE = 80.0
STRONG_MATCH_THRESHOLD = 50
PROVEN_SUCCESS_RATE = 90


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class ConfidenceScorer:
    """Combines the handoff signals into a single 0-100 confidence."""

    def __init__(
        self,
        matcher: Optional[CapabilityMatcher] = None,
        success_rates: Optional[SuccessRateProvider] = None,
        default_success_rate: float = DEFAULT_SUCCESS_RATE,
    ):
        """Initialize the scorer.

        Args:
            matcher: Capability matcher (keyword matcher by default)
            success_rates: Optional historical success-rate provider
            default_success_rate: Rate used when an agent has no history
        """
        self.matcher = matcher or KeywordCapabilityMatcher()
        self.success_rates = success_rates
        self.default_success_rate = default_success_rate

    def _success_rate(self, agent_id: str) -> float:
        if self.success_rates is None:
            return self.default_success_rate
        rate = self.success_rates.get_success_rate(agent_id)
        return self.default_success_rate if rate is None else rate

    def raw_score(
        self, context: HandoffContext, agent: Agent, source_agent: Optional[Agent] = None
    ) -> Tuple[float, List[str]]:
        """Compute the unrounded, unclamped score and its reasoning clauses.

        Raises:
            InvalidTierError: If the user's or the agent's tier is unknown
        """
        score = 0.0
        clauses: List[str] = []

        source_category = source_agent.category if source_agent else None
        if agent.category and agent.category != source_category:
            score += COMPLEMENTARY_CATEGORY_BONUS
            clauses.append(f"Complementary expertise ({agent.category}).")

        match = self.matcher.match(context.user_intent, agent)
        score += match * CAPABILITY_WEIGHT
        if match > STRONG_MATCH_THRESHOLD:
            clauses.append(f'Strong capability match ({match}) for "{context.user_intent}".')
        elif match > 0:
            clauses.append(f"Partial capability match ({match}).")

        if agent.id in context.preferred_agents:
            score += PREFERRED_AGENT_BONUS
            clauses.append("User preferred agent.")
        if agent.id in context.avoided_agents:
            score -= AVOIDED_AGENT_PENALTY
            clauses.append("User avoided agent.")

        if tier_allows(context.session_context.user_tier, agent.required_tier):
            score += TIER_COMPATIBLE_BONUS
        else:
            score -= TIER_MISMATCH_PENALTY
            clauses.append(f"Requires {agent.required_tier} tier.")

        rate = self._success_rate(agent.id)
        score += rate * SUCCESS_RATE_WEIGHT
        if rate >= PROVEN_SUCCESS_RATE:
            clauses.append(f"Proven track record ({rate:.0f}% success).")

        return score, clauses

    def score(
        self, context: HandoffContext, agent: Agent, source_agent: Optional[Agent] = None
    ) -> Tuple[int, str]:
        """Score one candidate agent.

        Args:
            context: Handoff request
            agent: Candidate agent
            source_agent: Agent handing off, for category complementarity

        Returns:
            Tuple of (confidence, reasoning)

        Raises:
            InvalidTierError: If the user's or the agent's tier is unknown
        """
        raw, clauses = self.raw_score(context, agent, source_agent)
        confidence = max(0, min(100, round_half_up(raw)))
        logger.debug(f"Scored {agent.id}: raw={raw:.1f} confidence={confidence}")
        return confidence, " ".join(clauses)

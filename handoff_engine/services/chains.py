"""
Workflow chain matching.
"""
import logging
from typing import List, Optional

from handoff_engine.domains.agents import tier_allows
from handoff_engine.domains.errors import InvalidTierError
from handoff_engine.domains.handoff import (
    HandoffContext,
    HandoffRecommendation,
    WorkflowChain,
)
from handoff_engine.interfaces.providers.chains import ChainCatalogProvider
from handoff_engine.repositories.chains import StaticChainCatalog

logger = logging.getLogger(__name__)


class WorkflowChainMatcher:
    """Finds the first catalog chain the current recommendations can run.

    A chain qualifies when every one of its agents was recommended, the
    user's tier meets the chain's tier, and the intent mentions one of the
    chain's keywords. Chains are checked in catalog order and the first
    qualifying one wins; chains are never scored against each other.
    """

    def __init__(self, catalog: Optional[ChainCatalogProvider] = None):
        self.catalog = catalog or StaticChainCatalog()

    @staticmethod
    def _mentions_keyword(intent: str, chain: WorkflowChain) -> bool:
        return any(keyword.lower() in intent for keyword in chain.keywords if keyword)

    def qualifies(
        self,
        chain: WorkflowChain,
        context: HandoffContext,
        recommended_ids: List[str],
    ) -> bool:
        """Check one chain against the recommendation set, tier and intent.

        Raises:
            InvalidTierError: If the user's or the chain's tier is unknown
        """
        if not all(agent_id in recommended_ids for agent_id in chain.agent_ids):
            return False
        if not tier_allows(context.session_context.user_tier, chain.required_tier):
            return False
        return self._mentions_keyword(context.user_intent.lower(), chain)

    def match_chain(
        self,
        context: HandoffContext,
        recommendations: List[HandoffRecommendation],
    ) -> Optional[WorkflowChain]:
        """Return the first qualifying chain, or None.

        Chains with an unknown tier are skipped.

        Raises:
            InvalidTierError: If the user's tier is unknown
        """
        recommended_ids = [r.agent_id for r in recommendations]
        for chain in self.catalog.get_chains():
            try:
                if self.qualifies(chain, context, recommended_ids):
                    logger.info(f"Matched workflow chain {chain.id}")
                    return chain
            except InvalidTierError as e:
                if e.tier == context.session_context.user_tier:
                    raise
                logger.warning(f"Skipping chain {chain.id}: {e}")
        return None

"""
Static, versioned catalog of workflow chains.
"""
from typing import Any, Dict, Iterable, List, Optional

from handoff_engine.domains.handoff import ChainStep, WorkflowChain
from handoff_engine.interfaces.providers.chains import ChainCatalogProvider

CHAIN_CATALOG_VERSION = "1.0.0"

DEFAULT_CHAINS: List[WorkflowChain] = [
    WorkflowChain(
        id="content-marketing-chain",
        name="Complete Content Marketing Workflow",
        description="End-to-end content creation, optimization, and promotion",
        steps=[
            ChainStep(agent_id="content-creator", order=1),
            ChainStep(
                agent_id="seo-specialist",
                order=2,
                output_mapping={"article": "content_to_optimize"},
            ),
            ChainStep(
                agent_id="social-media-manager",
                order=3,
                output_mapping={"optimized_content": "post_source"},
            ),
        ],
        estimated_duration=45,
        required_tier="starter",
        success_rate=92,
        user_rating=4.7,
        keywords=["content", "marketing"],
    ),
    WorkflowChain(
        id="brand-launch-chain",
        name="Brand Launch Campaign",
        description="Complete brand launch with content, design, and marketing",
        steps=[
            ChainStep(agent_id="brand-strategist", order=1),
            ChainStep(
                agent_id="content-creator",
                order=2,
                parallel_with=["graphic-designer"],
            ),
            ChainStep(
                agent_id="graphic-designer",
                order=2,
                parallel_with=["content-creator"],
            ),
            ChainStep(agent_id="social-media-manager", order=3),
        ],
        estimated_duration=90,
        required_tier="star",
        success_rate=88,
        user_rating=4.9,
        keywords=["brand", "launch"],
    ),
]


class StaticChainCatalog(ChainCatalogProvider):
    """Chain catalog held in memory in a fixed order."""

    def __init__(
        self,
        chains: Optional[Iterable[WorkflowChain]] = None,
        version: str = CHAIN_CATALOG_VERSION,
    ):
        self._chains = tuple(DEFAULT_CHAINS if chains is None else chains)
        self._version = version

    @classmethod
    def from_config(
        cls, chain_configs: List[Dict[str, Any]], version: str = CHAIN_CATALOG_VERSION
    ) -> "StaticChainCatalog":
        """Build a catalog from a list of chain dicts."""
        return cls((WorkflowChain(**config) for config in chain_configs), version)

    def get_chains(self) -> List[WorkflowChain]:
        return list(self._chains)

    @property
    def version(self) -> str:
        return self._version

"""
In-memory agent catalog.

The catalog is loaded once and treated as read-only for the lifetime of
the process.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from handoff_engine.domains.agents import Agent
from handoff_engine.interfaces.providers.catalog import AgentCatalogProvider

logger = logging.getLogger(__name__)


DEFAULT_AGENTS: List[Agent] = [
    Agent(
        id="percy",
        name="Percy",
        superhero_name="Percy the Cosmic Concierge",
        category="Concierge",
        description="Guides users to the right agent and orchestrates multi-agent workflows",
        capabilities=["orchestration", "recommendation", "onboarding"],
        required_tier="client",
    ),
    Agent(
        id="content-creator",
        name="Content Creator",
        superhero_name="ContentCarltig the Word Weaver",
        category="Content Creation",
        description="Writes blog posts, articles and marketing copy that converts readers",
        capabilities=["blog", "article", "copywriting", "content"],
        required_tier="starter",
    ),
    Agent(
        id="seo-specialist",
        name="SEO Specialist",
        superhero_name="Rankmaster the Search Sage",
        category="Marketing",
        description="Optimizes website content for search engines with keyword research and audits",
        capabilities=["seo", "keyword", "search ranking"],
        required_tier="starter",
    ),
    Agent(
        id="social-media-manager",
        name="Social Media Manager",
        superhero_name="SocialNino the Viral Virtuoso",
        category="Social Media",
        description="Plans, schedules and promotes posts across social media channels to grow engagement",
        capabilities=["social", "hashtag", "engagement", "promote"],
        required_tier="starter",
    ),
    Agent(
        id="email-marketer",
        name="Email Marketer",
        superhero_name="Inboxia the Campaign Courier",
        category="Marketing",
        description="Builds email campaigns, newsletters and automated drip sequences",
        capabilities=["email", "newsletter", "drip"],
        required_tier="starter",
    ),
    Agent(
        id="analytics-agent",
        name="Analytics Agent",
        superhero_name="The Don of Data",
        category="Analytics",
        description="Analyzes campaign performance data, conversion funnels and return on investment",
        capabilities=["analytics", "roi", "metrics", "report"],
        required_tier="starter",
    ),
    Agent(
        id="brand-strategist",
        name="Brand Strategist",
        superhero_name="BrandAlexander the Identity Architect",
        category="Strategy",
        description="Defines brand identity, positioning and go-to-market launch strategy",
        capabilities=["brand", "positioning", "launch"],
        required_tier="star",
    ),
    Agent(
        id="graphic-designer",
        name="Graphic Designer",
        superhero_name="Pixel Paladin",
        category="Design",
        description="Designs logos, social graphics and visual brand assets",
        capabilities=["logo", "graphic", "visual"],
        required_tier="star",
    ),
    Agent(
        id="ad-creative-agent",
        name="Ad Creative Agent",
        superhero_name="AdmEthen the Conversion Catalyst",
        category="Advertising",
        description="Generates ad creatives and copy for paid advertising campaigns",
        capabilities=["advertising", "ad creative", "paid campaign"],
        required_tier="star",
    ),
    Agent(
        id="video-content-agent",
        name="Video Content Agent",
        superhero_name="VideoVortex the Motion Master",
        category="Video",
        description="Scripts and edits short-form video content for reels and youtube",
        capabilities=["video", "script", "youtube"],
        required_tier="star",
    ),
    Agent(
        id="payment-manager",
        name="Payment Manager",
        superhero_name="PayPhomo the Revenue Guardian",
        category="Payments",
        description="Sets up checkout, invoicing and subscription billing",
        capabilities=["payment", "invoice", "billing"],
        required_tier="all_star",
    ),
]


class InMemoryAgentCatalog(AgentCatalogProvider):
    """Agent catalog backed by an immutable in-memory snapshot."""

    def __init__(self, agents: Optional[Iterable[Agent]] = None):
        """Initialize the catalog.

        Args:
            agents: Agents in catalog order (defaults to DEFAULT_AGENTS)
        """
        agents = list(DEFAULT_AGENTS if agents is None else agents)
        self._agents = tuple(agents)
        self._by_id: Dict[str, Agent] = {}
        for agent in self._agents:
            if agent.id in self._by_id:
                raise ValueError(f"Duplicate agent id in catalog: {agent.id}")
            self._by_id[agent.id] = agent
        logger.debug(f"Agent catalog loaded with {len(self._agents)} agents")

    @classmethod
    def from_config(cls, agent_configs: List[Dict[str, Any]]) -> "InMemoryAgentCatalog":
        """Build a catalog from a list of agent dicts."""
        return cls(Agent(**config) for config in agent_configs)

    def get_all_agents(self) -> List[Agent]:
        return list(self._agents)

    def get_agent(self, agent_id: str) -> Optional[Agent]:
        return self._by_id.get(agent_id)

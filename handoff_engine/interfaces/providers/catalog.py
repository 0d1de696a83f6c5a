from abc import ABC, abstractmethod
from typing import List, Optional

from handoff_engine.domains.agents import Agent


class AgentCatalogProvider(ABC):
    """Interface for read-only access to the agent catalog."""

    @abstractmethod
    def get_all_agents(self) -> List[Agent]:
        """Get every agent in the catalog, in catalog order."""
        pass

    @abstractmethod
    def get_agent(self, agent_id: str) -> Optional[Agent]:
        """Get an agent by id, or None if it is not in the catalog."""
        pass

from abc import ABC, abstractmethod

from handoff_engine.domains.agents import Agent


class CapabilityMatcher(ABC):
    """Interface for scoring free-text intent against an agent."""

    @abstractmethod
    def match(self, intent: str, agent: Agent) -> int:
        """Score how well an agent's capabilities fit the intent.

        Args:
            intent: Free-text user intent
            agent: Candidate agent

        Returns:
            Score between 0 and 100
        """
        pass

from abc import ABC, abstractmethod
from typing import Optional


class SuccessRateProvider(ABC):
    """Interface for historical agent success rates."""

    @abstractmethod
    def get_success_rate(self, agent_id: str) -> Optional[float]:
        """Get an agent's historical success percentage (0-100).

        Returns:
            The success rate, or None when no history is recorded
        """
        pass

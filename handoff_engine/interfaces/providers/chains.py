from abc import ABC, abstractmethod
from typing import List

from handoff_engine.domains.handoff import WorkflowChain


class ChainCatalogProvider(ABC):
    """Interface for the catalog of predefined workflow chains."""

    @abstractmethod
    def get_chains(self) -> List[WorkflowChain]:
        """Get all chains in fixed catalog order.

        Order matters: the first qualifying chain wins.
        """
        pass

    @property
    @abstractmethod
    def version(self) -> str:
        """Catalog version identifier."""
        pass

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple


class DataStorageProvider(ABC):
    """Interface for document storage used by the handoff repositories."""

    @abstractmethod
    def create_collection(self, name: str) -> None:
        """Create a collection if it does not exist."""
        pass

    @abstractmethod
    def insert_one(self, collection: str, document: Dict) -> str:
        """Insert a document and return its id."""
        pass

    @abstractmethod
    def find_one(self, collection: str, query: Dict) -> Optional[Dict]:
        """Find a single document."""
        pass

    @abstractmethod
    def find(
        self,
        collection: str,
        query: Dict,
        sort: Optional[List[Tuple[str, int]]] = None,
        limit: int = 0,
    ) -> List[Dict]:
        """Find documents matching a query."""
        pass

    @abstractmethod
    def create_index(self, collection: str, keys: List[Tuple[str, int]], **kwargs) -> None:
        """Create an index."""
        pass

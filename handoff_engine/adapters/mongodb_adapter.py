"""
MongoDB adapter for the handoff engine.

This adapter implements the DataStorageProvider interface for MongoDB and
backs the handoff event store and success-rate lookups.
"""
import uuid
from typing import Dict, List, Optional, Tuple

from pymongo import MongoClient

from handoff_engine.interfaces.providers.data_storage import DataStorageProvider


class MongoDBAdapter(DataStorageProvider):
    """MongoDB implementation of DataStorageProvider."""

    def __init__(self, connection_string: str, database_name: str, client: Optional[MongoClient] = None):
        self.client = client or MongoClient(connection_string)
        self.db = self.client[database_name]

    def create_collection(self, name: str) -> None:
        if name not in self.db.list_collection_names():
            self.db.create_collection(name)

    def insert_one(self, collection: str, document: Dict) -> str:
        document = dict(document)
        document.setdefault("_id", str(uuid.uuid4()))
        self.db[collection].insert_one(document)
        return document["_id"]

    def find_one(self, collection: str, query: Dict) -> Optional[Dict]:
        return self.db[collection].find_one(query)

    def find(
        self,
        collection: str,
        query: Dict,
        sort: Optional[List[Tuple[str, int]]] = None,
        limit: int = 0,
    ) -> List[Dict]:
        cursor = self.db[collection].find(query)
        if sort:
            cursor = cursor.sort(sort)
        if limit > 0:
            cursor = cursor.limit(limit)
        return list(cursor)

    def create_index(self, collection: str, keys: List[Tuple[str, int]], **kwargs) -> None:
        self.db[collection].create_index(keys, **kwargs)

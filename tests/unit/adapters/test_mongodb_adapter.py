import os
import uuid
import pytest
import mongomock
from pymongo import MongoClient

from handoff_engine.adapters.mongodb_adapter import MongoDBAdapter


@pytest.fixture
def mongo_client():
    """Fixture for MongoDB client (mock or real based on env var)."""
    if os.environ.get("MONGODB_REAL") == "1":
        # Use real MongoDB for integration tests
        client = MongoClient("mongodb://localhost:27017/")
        yield client
        client.drop_database("test_db")
    else:
        yield mongomock.MongoClient()


@pytest.fixture
def mongodb_adapter(mongo_client):
    """Fixture for MongoDB adapter."""
    return MongoDBAdapter(
        connection_string="mongodb://localhost:27017/",
        database_name="test_db",
        client=mongo_client,
    )


@pytest.fixture
def events():
    """Handoff events out of timestamp order."""
    return [
        {"handoff_id": "h2", "user_id": "u1", "timestamp": "2025-01-02T00:00:00+00:00"},
        {"handoff_id": "h1", "user_id": "u1", "timestamp": "2025-01-01T00:00:00+00:00"},
        {"handoff_id": "h3", "user_id": "u1", "timestamp": "2025-01-03T00:00:00+00:00"},
        {"handoff_id": "h4", "user_id": "u2", "timestamp": "2025-01-04T00:00:00+00:00"},
    ]


class TestMongoDBAdapter:
    """Test suite for MongoDB adapter."""

    def test_init(self, mongodb_adapter):
        assert mongodb_adapter.db.name == "test_db"

    def test_create_collection(self, mongodb_adapter):
        mongodb_adapter.create_collection("handoff_events")
        assert "handoff_events" in mongodb_adapter.db.list_collection_names()

    def test_create_collection_twice(self, mongodb_adapter):
        """Creating an existing collection is a no-op."""
        mongodb_adapter.create_collection("handoff_events")
        mongodb_adapter.create_collection("handoff_events")
        assert mongodb_adapter.db.list_collection_names().count("handoff_events") == 1

    def test_insert_one_with_id(self, mongodb_adapter):
        result_id = mongodb_adapter.insert_one("handoff_events", {"_id": "event_1", "handoff_id": "h1"})
        assert result_id == "event_1"
        stored = mongodb_adapter.db["handoff_events"].find_one({"_id": "event_1"})
        assert stored["handoff_id"] == "h1"

    def test_insert_one_without_id(self, mongodb_adapter):
        """Inserting without an _id generates a UUID string."""
        document = {"handoff_id": "h1"}
        result_id = mongodb_adapter.insert_one("handoff_events", document)
        uuid.UUID(result_id)
        assert "_id" not in document
        stored = mongodb_adapter.db["handoff_events"].find_one({"_id": result_id})
        assert stored["handoff_id"] == "h1"

    def test_find_one(self, mongodb_adapter):
        mongodb_adapter.insert_one("metrics", {"agent_id": "percy", "success_rate": 95})
        assert mongodb_adapter.find_one("metrics", {"agent_id": "percy"})["success_rate"] == 95
        assert mongodb_adapter.find_one("metrics", {"agent_id": "ghost"}) is None

    def test_find_with_sort_and_limit(self, mongodb_adapter, events):
        for event in events:
            mongodb_adapter.insert_one("handoff_events", event)

        results = mongodb_adapter.find(
            "handoff_events", {"user_id": "u1"}, sort=[("timestamp", -1)], limit=2
        )

        assert [r["handoff_id"] for r in results] == ["h3", "h2"]

    def test_find_without_limit(self, mongodb_adapter, events):
        for event in events:
            mongodb_adapter.insert_one("handoff_events", event)

        results = mongodb_adapter.find("handoff_events", {"user_id": "u1"}, sort=[("timestamp", 1)])

        assert [r["handoff_id"] for r in results] == ["h1", "h2", "h3"]

    def test_create_index(self, mongodb_adapter):
        mongodb_adapter.create_collection("metrics")
        mongodb_adapter.create_index("metrics", [("agent_id", 1)], unique=True)
        info = mongodb_adapter.db["metrics"].index_information()
        assert any(index["key"] == [("agent_id", 1)] for index in info.values())

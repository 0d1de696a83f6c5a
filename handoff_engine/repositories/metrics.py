"""
Historical success-rate providers.
"""
import logging
from typing import Dict, Optional

from handoff_engine.interfaces.providers.data_storage import DataStorageProvider
from handoff_engine.interfaces.providers.metrics import SuccessRateProvider

logger = logging.getLogger(__name__)

DEFAULT_SUCCESS_RATES: Dict[str, float] = {
    "percy": 95,
    "content-creator": 88,
    "social-media-manager": 92,
    "email-marketer": 85,
    "seo-specialist": 90,
}


class StaticSuccessRateProvider(SuccessRateProvider):
    """Success rates from a fixed mapping."""

    def __init__(self, rates: Optional[Dict[str, float]] = None):
        self._rates = dict(DEFAULT_SUCCESS_RATES if rates is None else rates)

    def get_success_rate(self, agent_id: str) -> Optional[float]:
        return self._rates.get(agent_id)


class MongoSuccessRateProvider(SuccessRateProvider):
    """Success rates read from the agent_performance_metrics collection."""

    def __init__(self, db_provider: DataStorageProvider):
        """Initialize the provider.

        Args:
            db_provider: Provider for database operations
        """
        self.db = db_provider
        self.collection = "agent_performance_metrics"
        self.db.create_collection(self.collection)
        self.db.create_index(self.collection, [("agent_id", 1)], unique=True)

    def get_success_rate(self, agent_id: str) -> Optional[float]:
        """Look up an agent's success rate.

        Lookup errors are logged and treated as missing history so scoring
        falls back to the default rate.
        """
        try:
            doc = self.db.find_one(self.collection, {"agent_id": agent_id})
        except Exception as e:
            logger.warning(f"Could not read success rate for {agent_id}: {e}")
            return None
        if not doc or doc.get("success_rate") is None:
            return None
        try:
            return float(doc["success_rate"])
        except (TypeError, ValueError):
            logger.warning(
                f"Ignoring non-numeric success rate for {agent_id}: {doc['success_rate']!r}"
            )
            return None

"""
Factory for creating and wiring components of the handoff engine.

This module handles the creation and dependency injection for all
services and collaborators used by the engine.
"""

import logging
from typing import Any, Dict, Optional

# Service imports
from handoff_engine.services.capability import KeywordCapabilityMatcher
from handoff_engine.services.chains import WorkflowChainMatcher
from handoff_engine.services.executor import HandoffExecutor
from handoff_engine.services.handoff import HandoffService
from handoff_engine.services.ranking import (
    INCLUSION_THRESHOLD,
    MAX_RECOMMENDATIONS,
    RecommendationRanker,
)
from handoff_engine.services.scoring import DEFAULT_SUCCESS_RATE, ConfidenceScorer

# Repository imports
from handoff_engine.repositories.agent import InMemoryAgentCatalog
from handoff_engine.repositories.chains import CHAIN_CATALOG_VERSION, StaticChainCatalog
from handoff_engine.repositories.handoff import MongoHandoffRepository
from handoff_engine.repositories.metrics import (
    MongoSuccessRateProvider,
    StaticSuccessRateProvider,
)

# Adapter imports
from handoff_engine.adapters.mongodb_adapter import MongoDBAdapter
from handoff_engine.adapters.telemetry_adapter import LoggingTelemetrySink
from handoff_engine.adapters.workflow_adapter import (
    NullWorkflowTrigger,
    WebhookWorkflowTrigger,
)

from handoff_engine.interfaces.providers.metrics import SuccessRateProvider

# Setup logger for this module
logger = logging.getLogger(__name__)


class HandoffEngineFactory:
    """Factory for creating and wiring components of the handoff engine."""

    @staticmethod
    def _create_db_adapter(config: Dict[str, Any]) -> Optional[MongoDBAdapter]:
        if "mongo" not in config:
            return None
        mongo = config["mongo"]
        if "connection_string" not in mongo:
            raise ValueError("MongoDB connection string is required.")
        if "database" not in mongo:
            raise ValueError("MongoDB database name is required.")
        return MongoDBAdapter(
            connection_string=mongo["connection_string"],
            database_name=mongo["database"],
        )

    @staticmethod
    def _create_success_rates(
        config: Dict[str, Any], db_adapter: Optional[MongoDBAdapter]
    ) -> SuccessRateProvider:
        metrics = config.get("metrics", {})
        if metrics.get("source") == "mongo":
            if db_adapter is None:
                raise ValueError("metrics.source 'mongo' requires a mongo section.")
            logger.info("Using MongoDB for agent success rates")
            return MongoSuccessRateProvider(db_adapter)
        if "success_rates" in config:
            return StaticSuccessRateProvider(config["success_rates"])
        return StaticSuccessRateProvider()

    @staticmethod
    def _create_trigger(config: Dict[str, Any]):
        workflow = config.get("workflow", {})
        webhooks = workflow.get("webhooks")
        if not webhooks:
            return NullWorkflowTrigger()
        logger.info(f"Using webhook workflow trigger for {len(webhooks)} agents")
        return WebhookWorkflowTrigger(
            webhooks=webhooks,
            timeout=float(workflow.get("timeout", 10.0)),
            source=workflow.get("source", "handoff-engine"),
        )

    @staticmethod
    def create_from_config(config: Dict[str, Any]) -> HandoffService:
        """Create the handoff service from configuration.

        Args:
            config: Configuration dictionary

        Returns:
            Configured HandoffService instance

        Raises:
            ValueError: If a configured section is missing required keys
        """
        db_adapter = HandoffEngineFactory._create_db_adapter(config)

        if config.get("agents"):
            catalog = InMemoryAgentCatalog.from_config(config["agents"])
            logger.info(f"Loaded {len(config['agents'])} agents from config")
        else:
            catalog = InMemoryAgentCatalog()

        if config.get("chains"):
            chain_catalog = StaticChainCatalog.from_config(
                config["chains"], config.get("chains_version", CHAIN_CATALOG_VERSION)
            )
        else:
            chain_catalog = StaticChainCatalog()

        scoring = config.get("scoring", {})
        scorer = ConfidenceScorer(
            matcher=KeywordCapabilityMatcher(),
            success_rates=HandoffEngineFactory._create_success_rates(config, db_adapter),
            default_success_rate=float(
                scoring.get("default_success_rate", DEFAULT_SUCCESS_RATE)
            ),
        )
        ranker = RecommendationRanker(
            scorer=scorer,
            threshold=int(scoring.get("threshold", INCLUSION_THRESHOLD)),
            max_recommendations=int(
                scoring.get("max_recommendations", MAX_RECOMMENDATIONS)
            ),
        )

        if db_adapter is not None:
            repository = MongoHandoffRepository(db_adapter)
            telemetry = repository
            logger.info("Recording handoff events in MongoDB")
        else:
            repository = None
            telemetry = LoggingTelemetrySink()
            logger.warning("No event store configured; handoff history will be empty")

        executor = HandoffExecutor(
            telemetry=telemetry,
            trigger=HandoffEngineFactory._create_trigger(config),
        )

        return HandoffService(
            catalog=catalog,
            ranker=ranker,
            chain_matcher=WorkflowChainMatcher(chain_catalog),
            executor=executor,
            repository=repository,
        )

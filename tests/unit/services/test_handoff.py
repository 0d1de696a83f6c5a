"""
Tests for the HandoffService implementation.

This module covers analysis, execution, history, rating and status lookups
against the default agent and chain catalogs.
"""
import asyncio

import pytest
from hypothesis import HealthCheck, given, settings, strategies as st
from unittest.mock import AsyncMock, Mock

from handoff_engine.domains import (
    Agent,
    EventType,
    HandoffContext,
    HandoffEvent,
    HandoffState,
    SessionContext,
    UserPreferences,
)
from handoff_engine.repositories.agent import DEFAULT_AGENTS, InMemoryAgentCatalog
from handoff_engine.repositories.metrics import StaticSuccessRateProvider
from handoff_engine.services.executor import HandoffExecutor
from handoff_engine.services.handoff import HandoffService, new_handoff_id
from handoff_engine.services.ranking import RecommendationRanker
from handoff_engine.services.scoring import ConfidenceScorer

AGENT_IDS = [agent.id for agent in DEFAULT_AGENTS]


def make_context(
    source="content-creator",
    intent="promote this blog post on social media",
    tier="starter",
    previous=None,
    preferences=None,
):
    return HandoffContext(
        source_agent_id=source,
        user_intent=intent,
        user_preferences=preferences,
        session_context=SessionContext(
            user_id="user1",
            session_id="sess1",
            user_tier=tier,
            previous_agents=previous or [],
        ),
    )


@pytest.fixture
def telemetry():
    sink = Mock()
    sink.track_event = AsyncMock()
    return sink


@pytest.fixture
def repository():
    repo = Mock()
    repo.find_events = Mock(return_value=[])
    repo.find_events_for_handoff = Mock(return_value=[])
    repo.save_rating = Mock(return_value="rating_id")
    return repo


@pytest.fixture
def service(telemetry):
    return HandoffService(
        catalog=InMemoryAgentCatalog(),
        executor=HandoffExecutor(telemetry=telemetry),
        id_factory=lambda: "handoff_test",
    )


@pytest.fixture
def service_with_repo(telemetry, repository):
    return HandoffService(
        catalog=InMemoryAgentCatalog(),
        executor=HandoffExecutor(telemetry=telemetry),
        repository=repository,
        id_factory=lambda: "handoff_test",
    )


def test_new_handoff_id_is_unique():
    first, second = new_handoff_id(), new_handoff_id()
    assert first.startswith("handoff_")
    assert first != second


class TestAnalyzeHandoffIntent:
    """Tests for analyze_handoff_intent."""

    @pytest.mark.asyncio
    async def test_social_handoff_from_content_creator(self, service, telemetry):
        result = await service.analyze_handoff_intent(make_context())

        assert result.success is True
        assert result.state == HandoffState.RECOMMENDED
        assert result.handoff_id == "handoff_test"
        assert result.target_agent.agent_id == "social-media-manager"
        assert result.target_agent.confidence == 89
        assert "Strong capability match" in result.target_agent.reasoning
        assert result.workflow_chain is None
        assert result.telemetry_error is None

        ids = [rec.agent_id for rec in result.recommendations]
        assert "content-creator" not in ids
        for star_agent in ("brand-strategist", "graphic-designer"):
            assert star_agent not in ids
        assert len(result.alternative_agents) <= 3
        assert result.alternative_agents == result.recommendations[1:4]

        event = telemetry.track_event.call_args[0][0]
        assert event.event_type == EventType.FEATURE_USE
        assert event.metadata["target_agent"] == "social-media-manager"
        assert event.metadata["confidence"] == 89

    @pytest.mark.asyncio
    async def test_workflow_chain_recommended(self, service):
        result = await service.analyze_handoff_intent(
            make_context(source="percy", intent="plan my content marketing")
        )

        assert result.success is True
        assert result.workflow_chain is not None
        assert result.workflow_chain.id == "content-marketing-chain"
        assert result.target_agent.agent_id == "content-creator"

    @pytest.mark.asyncio
    async def test_analysis_is_deterministic(self, telemetry):
        ids = iter(["h1", "h2"])
        service = HandoffService(
            catalog=InMemoryAgentCatalog(),
            executor=HandoffExecutor(telemetry=telemetry),
            id_factory=lambda: next(ids),
        )
        context = make_context()

        first = await service.analyze_handoff_intent(context)
        second = await service.analyze_handoff_intent(context)

        assert first.handoff_id != second.handoff_id
        assert [r.model_dump() for r in first.recommendations] == [
            r.model_dump() for r in second.recommendations
        ]

    @pytest.mark.asyncio
    async def test_previous_agents_are_skipped(self, service):
        result = await service.analyze_handoff_intent(
            make_context(previous=["social-media-manager"])
        )
        assert result.success is True
        assert "social-media-manager" not in [r.agent_id for r in result.recommendations]

    @pytest.mark.asyncio
    async def test_preferences_change_ranking(self, service):
        result = await service.analyze_handoff_intent(
            make_context(
                preferences=UserPreferences(
                    preferred_agents=["email-marketer"],
                    avoided_agents=["social-media-manager"],
                )
            )
        )
        assert result.target_agent.agent_id == "email-marketer"
        assert "User preferred agent." in result.target_agent.reasoning

    @pytest.mark.asyncio
    async def test_unknown_source_agent(self, service, telemetry):
        result = await service.analyze_handoff_intent(make_context(source="ghost"))

        assert result.success is False
        assert result.state == HandoffState.REJECTED
        assert result.error == "SourceAgentNotFound"
        assert "ghost" in result.message
        telemetry.track_event.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_user_tier(self, service):
        result = await service.analyze_handoff_intent(make_context(tier="platinum"))

        assert result.success is False
        assert result.error == "InvalidTier"
        assert "platinum" in result.message

    @pytest.mark.asyncio
    async def test_no_candidate(self, telemetry):
        catalog = InMemoryAgentCatalog([
            Agent(id="source", name="Source", category="Content"),
            Agent(id="weak", name="Weak", category="Content", required_tier="star"),
            Agent(id="broken", name="Broken", category="Design", required_tier="gold"),
        ])
        service = HandoffService(
            catalog=catalog,
            ranker=RecommendationRanker(
                scorer=ConfidenceScorer(success_rates=StaticSuccessRateProvider({}))
            ),
            executor=HandoffExecutor(telemetry=telemetry),
        )

        result = await service.analyze_handoff_intent(make_context(source="source"))

        assert result.success is False
        assert result.state == HandoffState.REJECTED
        assert result.error == "NoCandidate"
        assert [e.agent_id for e in result.excluded_agents] == ["broken"]
        telemetry.track_event.assert_not_called()

    @pytest.mark.asyncio
    async def test_telemetry_failure_keeps_success(self):
        sink = Mock()
        sink.track_event = AsyncMock(side_effect=RuntimeError("disk full"))
        service = HandoffService(
            catalog=InMemoryAgentCatalog(), executor=HandoffExecutor(telemetry=sink)
        )

        result = await service.analyze_handoff_intent(make_context())

        assert result.success is True
        assert result.target_agent.agent_id == "social-media-manager"
        assert "disk full" in result.telemetry_error

    @pytest.mark.asyncio
    async def test_unexpected_error_is_internal(self, telemetry):
        catalog = Mock()
        catalog.get_agent = Mock(side_effect=RuntimeError("catalog exploded"))
        service = HandoffService(catalog=catalog, executor=HandoffExecutor(telemetry=telemetry))

        result = await service.analyze_handoff_intent(make_context())

        assert result.success is False
        assert result.error == "InternalError"
        assert result.message == "catalog exploded"


class TestExecuteHandoff:
    """Tests for execute_handoff."""

    @pytest.mark.asyncio
    async def test_execute(self, service, telemetry):
        result = await service.execute_handoff(
            "handoff_test", "social-media-manager", make_context()
        )
        assert result.success is True
        assert result.execution_id == "exec_handoff_test_social-media-manager"
        event = telemetry.track_event.call_args[0][0]
        assert event.event_type == EventType.AGENT_LAUNCH

    @pytest.mark.asyncio
    async def test_unexpected_executor_error(self, service):
        service.executor.execute = AsyncMock(side_effect=RuntimeError("boom"))
        result = await service.execute_handoff("h1", "seo-specialist", make_context())
        assert result.success is False
        assert result.state == HandoffState.FAILED
        assert result.error == "ExecutionFailure"


class TestHistory:
    """Tests for get_handoff_history."""

    @pytest.mark.asyncio
    async def test_without_repository(self, service):
        result = await service.get_handoff_history("user1")
        assert result.success is True
        assert result.events == []

    @pytest.mark.asyncio
    async def test_with_repository(self, service_with_repo, repository):
        event = HandoffEvent(
            event_type=EventType.FEATURE_USE, user_id="user1", handoff_id="h1"
        )
        repository.find_events.return_value = [event]

        result = await service_with_repo.get_handoff_history("user1", "sess1", 5)

        assert result.success is True
        assert result.events == [event]
        repository.find_events.assert_called_once_with("user1", "sess1", 5)

    @pytest.mark.asyncio
    async def test_limit_is_clamped(self, service_with_repo, repository):
        await service_with_repo.get_handoff_history("user1", limit=500)
        repository.find_events.assert_called_once_with("user1", None, 100)

    @pytest.mark.asyncio
    async def test_repository_error(self, service_with_repo, repository):
        repository.find_events.side_effect = Exception("connection refused")

        result = await service_with_repo.get_handoff_history("user1")

        assert result.success is False
        assert result.error == "HistoryUnavailable"


class TestRateHandoff:
    """Tests for rate_handoff."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rating", [0, 6, -1, True, 4.5, "5"])
    async def test_invalid_rating(self, service_with_repo, repository, rating):
        result = await service_with_repo.rate_handoff("h1", rating)
        assert result.success is False
        assert result.error == "InvalidRating"
        repository.save_rating.assert_not_called()

    @pytest.mark.asyncio
    async def test_rating_is_saved_and_tracked(self, service_with_repo, repository, telemetry):
        result = await service_with_repo.rate_handoff("h1", 5, "Great")

        assert result.success is True
        saved = repository.save_rating.call_args[0][0]
        assert saved.handoff_id == "h1"
        assert saved.rating == 5
        assert saved.feedback == "Great"
        event = telemetry.track_event.call_args[0][0]
        assert event.event_type == EventType.HANDOFF_RATED

    @pytest.mark.asyncio
    async def test_rating_without_repository(self, service, telemetry):
        result = await service.rate_handoff("h1", 3)
        assert result.success is True
        telemetry.track_event.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_save_failure(self, service_with_repo, repository):
        repository.save_rating.side_effect = Exception("write failed")
        result = await service_with_repo.rate_handoff("h1", 4)
        assert result.success is False
        assert result.error == "TelemetryFailure"


class TestHandoffStatus:
    """Tests for get_handoff_status."""

    @pytest.mark.asyncio
    async def test_without_repository(self, service):
        assert await service.get_handoff_status("h1") is None

    @pytest.mark.asyncio
    async def test_recommended(self, service_with_repo, repository):
        repository.find_events_for_handoff.return_value = [
            HandoffEvent(event_type=EventType.FEATURE_USE, handoff_id="h1"),
        ]
        assert await service_with_repo.get_handoff_status("h1") == HandoffState.RECOMMENDED

    @pytest.mark.asyncio
    async def test_executed(self, service_with_repo, repository):
        repository.find_events_for_handoff.return_value = [
            HandoffEvent(event_type=EventType.FEATURE_USE, handoff_id="h1"),
            HandoffEvent(event_type=EventType.AGENT_LAUNCH, handoff_id="h1"),
        ]
        assert await service_with_repo.get_handoff_status("h1") == HandoffState.EXECUTED

    @pytest.mark.asyncio
    async def test_unknown(self, service_with_repo):
        assert await service_with_repo.get_handoff_status("missing") is None

    @pytest.mark.asyncio
    async def test_repository_error(self, service_with_repo, repository):
        repository.find_events_for_handoff.side_effect = Exception("timeout")
        assert await service_with_repo.get_handoff_status("h1") is None


@settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(
    source=st.sampled_from(AGENT_IDS),
    previous=st.lists(st.sampled_from(AGENT_IDS), max_size=4),
    tier=st.sampled_from(["client", "starter", "star", "all_star", "admin"]),
    intent=st.text(
        alphabet=st.sampled_from("abcdefghijklmnopqrstuvwxyz "), max_size=60
    ),
)
def test_recommendation_properties(source, previous, tier, intent):
    """Recommendations exclude visited agents and stay sorted and bounded."""
    sink = Mock()
    sink.track_event = AsyncMock()
    service = HandoffService(
        catalog=InMemoryAgentCatalog(), executor=HandoffExecutor(telemetry=sink)
    )
    context = make_context(source=source, intent=intent, tier=tier, previous=previous)

    result = asyncio.run(service.analyze_handoff_intent(context))

    if not result.success:
        assert result.error == "NoCandidate"
        return
    recs = result.recommendations
    ids = [r.agent_id for r in recs]
    assert source not in ids
    assert not set(previous) & set(ids)
    assert len(recs) <= 8
    assert all(30 <= r.confidence <= 100 for r in recs)
    assert [(-r.confidence, r.agent_id) for r in recs] == sorted(
        (-r.confidence, r.agent_id) for r in recs
    )
    assert result.target_agent == recs[0]


@pytest.mark.asyncio
async def test_rating_reports_telemetry_failure(repository):
    sink = Mock()
    sink.track_event = AsyncMock(side_effect=RuntimeError("event store down"))
    service = HandoffService(
        catalog=InMemoryAgentCatalog(),
        executor=HandoffExecutor(telemetry=sink),
        repository=repository,
    )

    result = await service.rate_handoff("h1", 4)

    assert result.success is True
    assert "event store down" in result.telemetry_error
    repository.save_rating.assert_called_once()

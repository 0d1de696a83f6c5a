"""
Telemetry adapters for the handoff engine.
"""
import logging

from handoff_engine.domains.handoff import HandoffEvent
from handoff_engine.interfaces.providers.telemetry import TelemetrySink

logger = logging.getLogger(__name__)


class LoggingTelemetrySink(TelemetrySink):
    """Telemetry sink that only writes events to the log.

    Used when no event store is configured. Nothing is persisted, so
    handoff history stays empty.
    """

    async def track_event(self, event: HandoffEvent) -> None:
        logger.info(
            f"Handoff event {event.event_type.value}: handoff={event.handoff_id} "
            f"agent={event.agent_id} session={event.session_id} metadata={event.metadata}"
        )

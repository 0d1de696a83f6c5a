from abc import ABC, abstractmethod

from handoff_engine.domains.handoff import HandoffEvent


class TelemetrySink(ABC):
    """Interface for the append-only handoff event log."""

    @abstractmethod
    async def track_event(self, event: HandoffEvent) -> None:
        """Append an event.

        Raises:
            TelemetryError: If the event could not be written
        """
        pass

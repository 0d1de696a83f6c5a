from abc import ABC, abstractmethod
from typing import Any, Optional

from handoff_engine.domains.payloads import BasePayload


class WorkflowTrigger(ABC):
    """Interface for the downstream trigger that runs an agent's workflow."""

    @abstractmethod
    async def trigger_workflow(
        self,
        agent_id: str,
        execution_id: str,
        payload: Optional[BasePayload] = None,
    ) -> Any:
        """Start an agent's workflow without waiting for it to finish.

        Args:
            agent_id: Agent whose workflow should run
            execution_id: Correlation id for the run
            payload: Workflow payload (any payload variant)

        Returns:
            An opaque execution handle

        Raises:
            ExecutionError: If the trigger rejected the request
        """
        pass

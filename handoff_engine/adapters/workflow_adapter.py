"""
Workflow trigger adapters.

These adapters hand an execution off to whatever runs the target agent's
business logic. They return as soon as the run is accepted.
"""
import logging
from datetime import datetime, timezone
from typing import Dict, Optional

import httpx

from handoff_engine.domains.errors import ExecutionError
from handoff_engine.domains.payloads import BasePayload
from handoff_engine.interfaces.providers.workflow import WorkflowTrigger

logger = logging.getLogger(__name__)


class NullWorkflowTrigger(WorkflowTrigger):
    """Trigger that accepts every execution without running anything.

    Useful when the host application starts agent workflows itself from the
    returned execution id, or when running tests.
    """

    async def trigger_workflow(
        self,
        agent_id: str,
        execution_id: str,
        payload: Optional[BasePayload] = None,
    ) -> str:
        logger.debug(f"Null trigger accepted {execution_id} for {agent_id}")
        return execution_id


class WebhookWorkflowTrigger(WorkflowTrigger):
    """Trigger that posts executions to per-agent webhooks (e.g. n8n)."""

    def __init__(
        self,
        webhooks: Dict[str, str],
        timeout: float = 10.0,
        source: str = "handoff-engine",
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the webhook trigger.

        Args:
            webhooks: Mapping of agent id to webhook URL
            timeout: HTTP timeout in seconds
            source: Value sent as the payload's ``source`` field
            client: Optional shared HTTP client
        """
        self.webhooks = dict(webhooks)
        self.timeout = timeout
        self.source = source
        self._client = client

    def _build_body(
        self, agent_id: str, execution_id: str, payload: Optional[BasePayload]
    ) -> Dict:
        return {
            "agent_id": agent_id,
            "execution_id": execution_id,
            "payload": payload.model_dump(mode="json") if payload else {},
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "source": self.source,
        }

    async def _post(self, client: httpx.AsyncClient, url: str, body: Dict) -> httpx.Response:
        return await client.post(url, json=body, timeout=self.timeout)

    async def trigger_workflow(
        self,
        agent_id: str,
        execution_id: str,
        payload: Optional[BasePayload] = None,
    ) -> str:
        """Post the execution to the agent's webhook.

        Returns:
            The execution id reported by the webhook, or ours if it sent none

        Raises:
            ExecutionError: If no webhook is configured or the call failed
        """
        url = self.webhooks.get(agent_id)
        if not url:
            raise ExecutionError(f"No workflow webhook configured for agent '{agent_id}'")

        body = self._build_body(agent_id, execution_id, payload)
        try:
            if self._client is not None:
                response = await self._post(self._client, url, body)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._post(client, url, body)
        except httpx.HTTPError as e:
            logger.error(f"Webhook error for agent {agent_id}: {e}")
            raise ExecutionError(f"Failed to reach workflow webhook for '{agent_id}'") from e

        if response.status_code >= 400:
            raise ExecutionError(
                f"Workflow webhook for '{agent_id}' returned {response.status_code}: {response.text[:200]}"
            )

        handle = None
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict):
            handle = data.get("execution_id") or data.get("executionId")
        logger.info(f"Triggered workflow for {agent_id} ({execution_id})")
        return handle or execution_id

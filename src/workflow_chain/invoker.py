"""Runs one remote workflow and reduces its event stream to an output map."""

from __future__ import annotations

import logging
from contextlib import aclosing
from typing import Any

import httpx

from workflow_chain.errors import TransportError, UpstreamError
from workflow_chain.event_stream import iter_events
from workflow_chain.models.lifecycle_events import NodeFinished
from workflow_chain.models.lifecycle_events import NodeStarted
from workflow_chain.models.lifecycle_events import WorkflowFinished
from workflow_chain.models.lifecycle_events import WorkflowStarted
from workflow_chain.models.service_spec import ServiceSpec


logger = logging.getLogger(__name__)

ERROR_BODY_LIMIT = 500


class StepInvoker:
    def __init__(
        self,
        service: ServiceSpec | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.service: ServiceSpec = service or ServiceSpec()
        self._client: httpx.AsyncClient | None = client

    async def invoke(self, workflow_id: str, credential: str, inputs: dict[str, Any]) -> dict[str, Any]:
        if self._client is not None:
            return await self._invoke_with(self._client, workflow_id, credential, inputs)
        async with httpx.AsyncClient(timeout=self.service.timeout_s) as client:
            return await self._invoke_with(client, workflow_id, credential, inputs)

    def _headers(self, credential: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {credential}",
            "Content-Type": "application/json",
        }

    def _payload(self, inputs: dict[str, Any]) -> dict[str, Any]:
        return {
            "inputs": inputs,
            "response_mode": "streaming",
            "user": self.service.user,
        }

    async def _invoke_with(
        self,
        client: httpx.AsyncClient,
        workflow_id: str,
        credential: str,
        inputs: dict[str, Any],
    ) -> dict[str, Any]:
        url = self.service.run_url
        logger.info("Invoking workflow %s at %s", workflow_id, url)
        try:
            async with client.stream(
                "POST",
                url,
                json=self._payload(inputs),
                headers=self._headers(credential),
            ) as response:
                if not response.is_success:
                    body = await _error_body(response)
                    message = f"Workflow API error: {response.status_code} {response.reason_phrase}"
                    if body:
                        message = f"{message}: {body}"
                    raise TransportError(message, status_code=response.status_code)
                return await self._collect(workflow_id, response)
        except httpx.HTTPError as exc:
            raise TransportError(f"Workflow API request failed: {exc}") from exc

    async def _collect(self, workflow_id: str, response: httpx.Response) -> dict[str, Any]:
        node_outputs: dict[str, Any] = {}
        finished: WorkflowFinished | None = None
        async with aclosing(iter_events(response.aiter_bytes())) as events:
            async for event in events:
                if isinstance(event, WorkflowStarted):
                    logger.info("Workflow %s started run %s", workflow_id, event.run_id)
                elif isinstance(event, NodeStarted):
                    logger.debug("Workflow %s node %s started", workflow_id, event.node_id)
                elif isinstance(event, NodeFinished):
                    logger.debug("Workflow %s node %s finished", workflow_id, event.node_id)
                    node_outputs.update(event.outputs)
                elif isinstance(event, WorkflowFinished):
                    finished = event

        if finished is None:
            raise TransportError(f"Workflow {workflow_id} stream ended before the workflow finished")
        if finished.error:
            logger.warning("Workflow %s run %s failed: %s", workflow_id, finished.run_id, finished.error)
            raise UpstreamError(finished.error)
        logger.info("Workflow %s run %s finished with status %s", workflow_id, finished.run_id, finished.status)
        return {**node_outputs, **finished.outputs}


async def _error_body(response: httpx.Response) -> str:
    try:
        await response.aread()
    except httpx.HTTPError:
        return ""
    return response.text[:ERROR_BODY_LIMIT].strip()

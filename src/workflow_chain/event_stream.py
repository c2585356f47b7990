"""Decoder for the `data: <json>` line protocol streamed by workflow runs."""

from __future__ import annotations

import codecs
import json
import logging
from contextlib import aclosing
from typing import Any, AsyncIterator

from pydantic import ValidationError

from workflow_chain.errors import DecodeError, UpstreamError
from workflow_chain.models.lifecycle_events import LifecycleEvent
from workflow_chain.models.lifecycle_events import NodeFinished
from workflow_chain.models.lifecycle_events import NodeStarted
from workflow_chain.models.lifecycle_events import WorkflowFinished
from workflow_chain.models.lifecycle_events import WorkflowStarted


logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DEFAULT_ERROR_MESSAGE = "Workflow execution failed"


async def iter_events(source: AsyncIterator[bytes]) -> AsyncIterator[LifecycleEvent]:
    """
    Yields lifecycle events parsed from a chunked byte stream.

    Lines split across chunks are buffered until their newline arrives. Iteration
    stops after the workflow_finished event or when the source is exhausted; the
    source is closed on every exit path.
    """
    decoder = codecs.getincrementaldecoder("utf-8")()
    buffer = ""
    async with aclosing(source) as chunks:
        async for chunk in chunks:
            buffer += _decode(decoder, chunk, final=False)
            lines = buffer.split("\n")
            buffer = lines.pop()
            for line in lines:
                event = parse_line(line)
                if event is None:
                    continue
                yield event
                if isinstance(event, WorkflowFinished):
                    return
        buffer += _decode(decoder, b"", final=True)
        event = parse_line(buffer)
        if event is not None:
            yield event


def _decode(decoder: codecs.IncrementalDecoder, chunk: bytes, *, final: bool) -> str:
    try:
        return decoder.decode(chunk, final=final)
    except UnicodeDecodeError as exc:
        raise DecodeError(f"Workflow stream is not valid UTF-8: {exc}") from exc


def parse_line(line: str) -> LifecycleEvent | None:
    """
    Parses one protocol line. Returns None for lines that carry no event.
    Raises UpstreamError for an error record.
    """
    if not line.strip() or not line.startswith(DATA_PREFIX):
        return None
    raw = line[len(DATA_PREFIX) :].strip()
    if not raw:
        return None
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.warning("Skipping unparseable stream record %r: %s", line, exc)
        return None
    if not isinstance(payload, dict):
        logger.warning("Skipping stream record that is not a JSON object: %r", line)
        return None
    try:
        return event_from_payload(payload)
    except ValidationError as exc:
        logger.warning("Skipping stream record with unexpected field types %r: %s", line, exc)
        return None


def event_from_payload(payload: dict[str, Any]) -> LifecycleEvent | None:
    kind = payload.get("event")
    data = payload.get("data")
    if not isinstance(data, dict):
        data = {}

    if kind == "error":
        raise UpstreamError(str(payload.get("message") or DEFAULT_ERROR_MESSAGE))
    if kind == "workflow_started":
        return WorkflowStarted(
            run_id=payload.get("workflow_run_id") or data.get("id"),
            workflow_id=data.get("workflow_id"),
        )
    if kind == "node_started":
        return NodeStarted(
            node_id=data.get("node_id"),
            title=data.get("title"),
            outputs=_outputs(data),
        )
    if kind == "node_finished":
        return NodeFinished(
            node_id=data.get("node_id"),
            title=data.get("title"),
            outputs=_outputs(data) or {},
        )
    if kind == "workflow_finished":
        error = data.get("error")
        return WorkflowFinished(
            run_id=payload.get("workflow_run_id") or data.get("id"),
            status=data.get("status"),
            outputs=_outputs(data) or {},
            error=str(error) if error else None,
        )

    logger.debug("Ignoring stream event %r", kind)
    return None


def _outputs(data: dict[str, Any]) -> dict[str, Any] | None:
    outputs = data.get("outputs")
    if isinstance(outputs, dict):
        return outputs
    return None

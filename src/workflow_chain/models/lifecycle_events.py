"""Typed events decoded from a workflow run's streaming response."""

from __future__ import annotations

from typing import Any, Literal, Optional, TypeAlias

from pydantic import BaseModel, Field


class WorkflowStarted(BaseModel):
    kind: Literal["started"] = "started"
    run_id: Optional[str] = None
    workflow_id: Optional[str] = None


class NodeStarted(BaseModel):
    kind: Literal["node_started"] = "node_started"
    node_id: Optional[str] = None
    title: Optional[str] = None
    outputs: Optional[dict[str, Any]] = None


class NodeFinished(BaseModel):
    kind: Literal["node_finished"] = "node_finished"
    node_id: Optional[str] = None
    title: Optional[str] = None
    outputs: dict[str, Any] = Field(default_factory=dict)


class WorkflowFinished(BaseModel):
    kind: Literal["finished"] = "finished"
    run_id: Optional[str] = None
    status: Optional[str] = None
    outputs: dict[str, Any] = Field(default_factory=dict)
    error: Optional[str] = None


LifecycleEvent: TypeAlias = WorkflowStarted | NodeStarted | NodeFinished | WorkflowFinished

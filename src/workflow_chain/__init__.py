"""Public package exports."""

from workflow_chain.errors import ChainBusyError
from workflow_chain.errors import DecodeError
from workflow_chain.errors import DuplicateChainError
from workflow_chain.errors import EditNotAllowedError
from workflow_chain.errors import NoMoreStepsError
from workflow_chain.errors import NotFoundError
from workflow_chain.errors import TransportError
from workflow_chain.errors import UpstreamError
from workflow_chain.errors import WorkflowChainError
from workflow_chain.event_stream import iter_events
from workflow_chain.input_resolver import classify_inputs, resolve_inputs
from workflow_chain.invoker import StepInvoker
from workflow_chain.orchestrator import ChainOrchestrator

__all__ = [
    "ChainBusyError",
    "ChainOrchestrator",
    "DecodeError",
    "DuplicateChainError",
    "EditNotAllowedError",
    "NoMoreStepsError",
    "NotFoundError",
    "StepInvoker",
    "TransportError",
    "UpstreamError",
    "WorkflowChainError",
    "classify_inputs",
    "iter_events",
    "resolve_inputs",
]

"""Exception taxonomy for chain execution."""

from __future__ import annotations


class WorkflowChainError(RuntimeError):
    pass


class TransportError(WorkflowChainError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamError(WorkflowChainError):
    """The remote workflow service reported a failure."""


class DecodeError(WorkflowChainError):
    """The response stream could not be decoded at all."""


class NotFoundError(WorkflowChainError):
    pass


class NoMoreStepsError(WorkflowChainError):
    pass


class DuplicateChainError(WorkflowChainError):
    pass


class ChainBusyError(WorkflowChainError):
    pass


class EditNotAllowedError(WorkflowChainError):
    pass

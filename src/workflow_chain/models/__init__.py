"""Model types for chain definitions and runtime state."""

from workflow_chain.models.chain_spec import ChainSpec
from workflow_chain.models.chain_step_result import ChainStepResult
from workflow_chain.models.chaining_rules import ChainingRules
from workflow_chain.models.input_shape import GenericSlot, InputShape, NamedSlots, NoChaining
from workflow_chain.models.lifecycle_events import LifecycleEvent
from workflow_chain.models.lifecycle_events import NodeFinished
from workflow_chain.models.lifecycle_events import NodeStarted
from workflow_chain.models.lifecycle_events import WorkflowFinished
from workflow_chain.models.lifecycle_events import WorkflowStarted
from workflow_chain.models.loaded_chain_file import LoadedChainFile
from workflow_chain.models.service_spec import ServiceSpec
from workflow_chain.models.status import Status
from workflow_chain.models.step_definition import StepDefinition
from workflow_chain.models.step_spec import StepSpec
from workflow_chain.models.workflow_chain import WorkflowChain
from workflow_chain.models.workflow_step import WorkflowStep

__all__ = [
    "ChainSpec",
    "ChainStepResult",
    "ChainingRules",
    "GenericSlot",
    "InputShape",
    "LifecycleEvent",
    "LoadedChainFile",
    "NamedSlots",
    "NoChaining",
    "NodeFinished",
    "NodeStarted",
    "ServiceSpec",
    "Status",
    "StepDefinition",
    "StepSpec",
    "WorkflowChain",
    "WorkflowFinished",
    "WorkflowStarted",
    "WorkflowStep",
]

"""In-memory chain state and step-by-step execution."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, Sequence

from workflow_chain.errors import ChainBusyError
from workflow_chain.errors import DuplicateChainError
from workflow_chain.errors import EditNotAllowedError
from workflow_chain.errors import NoMoreStepsError
from workflow_chain.errors import NotFoundError
from workflow_chain.input_resolver import classify_inputs, resolve_inputs
from workflow_chain.models.chain_step_result import ChainStepResult
from workflow_chain.models.chaining_rules import ChainingRules
from workflow_chain.models.status import Status
from workflow_chain.models.step_definition import StepDefinition
from workflow_chain.models.workflow_chain import WorkflowChain
from workflow_chain.models.workflow_step import WorkflowStep


logger = logging.getLogger(__name__)


class Invoker(Protocol):
    async def invoke(self, workflow_id: str, credential: str, inputs: dict[str, Any]) -> dict[str, Any]: ...


class ChainOrchestrator:
    """
    Owns every chain it creates and advances each one a single step per call.

    Meant for one event loop: the busy check and the switch to RUNNING in
    execute_next_step happen without an await in between, so a chain never has
    two steps in flight.
    """

    def __init__(self, invoker: Invoker, rules: ChainingRules | None = None) -> None:
        self._invoker: Invoker = invoker
        self.rules: ChainingRules = rules or ChainingRules()
        self._chains: dict[str, WorkflowChain] = {}

    def create_chain(self, chain_id: str, name: str, steps: Sequence[StepDefinition]) -> WorkflowChain:
        if chain_id in self._chains:
            raise DuplicateChainError(f"Chain {chain_id} already exists")
        if not steps:
            raise ValueError(f"Chain {chain_id} must have at least one step")
        chain = WorkflowChain(
            id=chain_id,
            name=name,
            steps=[
                WorkflowStep(
                    id=f"{chain_id}-step-{index}",
                    name=definition.name,
                    workflow_id=definition.workflow_id,
                    api_key=definition.api_key,
                    inputs=dict(definition.inputs),
                    allow_user_edit=definition.allow_user_edit,
                    input_shape=classify_inputs(definition.inputs, self.rules),
                )
                for index, definition in enumerate(steps)
            ],
        )
        self._chains[chain_id] = chain
        logger.info("Created chain %s (%s) with %d steps", chain_id, name, len(chain.steps))
        return chain

    def get_chain(self, chain_id: str) -> Optional[WorkflowChain]:
        return self._chains.get(chain_id)

    def get_all_chains(self) -> list[WorkflowChain]:
        return list(self._chains.values())

    def preview_inputs(
        self,
        chain_id: str,
        user_modifications: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Effective inputs the next step would run with. Does not touch chain state."""
        chain, step = self._require_next_step(chain_id)
        modifications = user_modifications if user_modifications is not None else step.user_modifications
        return self._effective_inputs(chain, step, modifications)

    async def execute_next_step(
        self,
        chain_id: str,
        user_modifications: dict[str, Any] | None = None,
    ) -> ChainStepResult:
        chain, step = self._require_next_step(chain_id)
        if chain.status == Status.RUNNING:
            raise ChainBusyError(f"Chain {chain_id} is already executing step {step.id}")
        if user_modifications is not None:
            if not step.allow_user_edit:
                raise EditNotAllowedError(f"Step {step.id} does not allow user edits")
            step.user_modifications = dict(user_modifications)

        inputs = self._effective_inputs(chain, step, step.user_modifications)
        step.status = Status.RUNNING
        chain.status = Status.RUNNING
        logger.info("Executing step %s (%s) of chain %s", step.id, step.name, chain_id)

        try:
            outputs = await self._invoker.invoke(step.workflow_id, step.api_key, inputs)
        except BaseException as exc:
            step.status = Status.FAILED
            chain.status = Status.FAILED
            logger.warning("Step %s of chain %s failed: %s", step.id, chain_id, exc)
            raise

        step.outputs = dict(outputs)
        step.status = Status.COMPLETED
        chain.current_step_index += 1
        if chain.current_step_index >= len(chain.steps):
            chain.status = Status.COMPLETED
            logger.info("Chain %s completed", chain_id)
        else:
            chain.status = Status.PENDING
        return ChainStepResult(step_id=step.id, outputs=dict(outputs), success=True)

    def get_current_step(self, chain_id: str) -> Optional[WorkflowStep]:
        chain = self._chains.get(chain_id)
        if chain is None:
            return None
        return chain.current_step

    def is_chain_completed(self, chain_id: str) -> bool:
        chain = self._chains.get(chain_id)
        return chain is not None and chain.status == Status.COMPLETED

    def has_next_step(self, chain_id: str) -> bool:
        chain = self._chains.get(chain_id)
        if chain is None:
            return False
        return chain.current_step_index < len(chain.steps)

    def reset_chain(self, chain_id: str) -> None:
        chain = self._chains.get(chain_id)
        if chain is None:
            return
        if chain.status == Status.RUNNING:
            raise ChainBusyError(f"Chain {chain_id} cannot be reset while a step is executing")
        chain.current_step_index = 0
        chain.status = Status.PENDING
        for step in chain.steps:
            step.status = Status.PENDING
            step.outputs = None
            step.user_modifications = None
        logger.info("Reset chain %s", chain_id)

    def delete_chain(self, chain_id: str) -> None:
        if self._chains.pop(chain_id, None) is not None:
            logger.info("Deleted chain %s", chain_id)

    def _require_next_step(self, chain_id: str) -> tuple[WorkflowChain, WorkflowStep]:
        chain = self._chains.get(chain_id)
        if chain is None:
            raise NotFoundError(f"Chain {chain_id} not found")
        step = chain.current_step
        if step is None:
            raise NoMoreStepsError(f"No more steps in chain {chain_id}")
        return chain, step

    def _effective_inputs(
        self,
        chain: WorkflowChain,
        step: WorkflowStep,
        user_modifications: dict[str, Any] | None,
    ) -> dict[str, Any]:
        previous = chain.previous_step
        previous_outputs = previous.outputs if previous is not None else None
        return resolve_inputs(step.input_shape, step.inputs, previous_outputs, user_modifications, self.rules)

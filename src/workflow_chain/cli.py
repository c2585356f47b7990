"""CLI entrypoint."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Any

from workflow_chain.chain_registry import ChainRegistry
from workflow_chain.errors import WorkflowChainError
from workflow_chain.invoker import StepInvoker
from workflow_chain.io_utils import load_edits, write_output
from workflow_chain.models.workflow_chain import WorkflowChain
from workflow_chain.orchestrator import ChainOrchestrator
from workflow_chain.review import render_review


logger = logging.getLogger(__name__)


async def run_chain(
    orch: ChainOrchestrator,
    chain_id: str,
    edits: dict[str, dict[str, Any]],
    review: bool = False,
) -> WorkflowChain:
    while orch.has_next_step(chain_id):
        step = orch.get_current_step(chain_id)
        chain = orch.get_chain(chain_id)
        if step is None or chain is None:
            break
        modifications = edits.get(step.name)
        if review:
            previous = chain.previous_step
            preview = orch.preview_inputs(chain_id, modifications)
            print(render_review(step, preview, previous.outputs if previous else None), file=sys.stderr)
        await orch.execute_next_step(chain_id, modifications)
    chain = orch.get_chain(chain_id)
    if chain is None:
        raise WorkflowChainError(f"Chain {chain_id} disappeared during execution")
    return chain


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="workflow-chain")
    parser.add_argument("--chains-dir", type=str, default="chains")
    parser.add_argument("--chain", type=str, required=True, help="Chain definition name (file stem)")
    parser.add_argument("--chain-id", type=str, default=None)
    parser.add_argument("--edits", type=str, default=None, help="YAML/JSON file of per-step input overrides")
    parser.add_argument("--output", type=str, default=None, help="Write the final chain JSON to this file")
    parser.add_argument("--review", action="store_true", help="Print each step's effective inputs before it runs")
    parser.add_argument("--log-level", type=str, default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    registry = ChainRegistry([Path(args.chains_dir)])
    loaded = registry.get(args.chain)
    edits = load_edits(Path(args.edits)) if args.edits else {}
    chain_id = args.chain_id or f"{args.chain}-{int(time.time() * 1000)}"

    orch = ChainOrchestrator(StepInvoker(loaded.spec.service), loaded.spec.chaining)
    orch.create_chain(chain_id, loaded.spec.name, loaded.step_definitions())

    # Async entrypoint
    import anyio

    try:
        chain = anyio.run(run_chain, orch, chain_id, edits, args.review)
    except WorkflowChainError as exc:
        logger.error("Chain %s failed: %s", chain_id, exc)
        print(f"error: {exc}", file=sys.stderr)
        failed = orch.get_chain(chain_id)
        if failed is not None and args.output:
            write_output(Path(args.output), failed.model_dump_json(indent=2))
        raise SystemExit(1) from exc

    payload = chain.model_dump_json(indent=2)
    if args.output:
        write_output(Path(args.output), payload)
    else:
        print(payload)

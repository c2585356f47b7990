"""Loaded chain markdown plus parsed metadata."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

import frontmatter

from workflow_chain.models.chain_spec import ChainSpec
from workflow_chain.models.step_definition import StepDefinition


logger = logging.getLogger(__name__)


@dataclass
class LoadedChainFile:
    spec: ChainSpec
    description: str
    source: str

    def __init__(self, chain: Path | str) -> None:
        post, source_label = load_chain_frontmatter(chain)
        spec = ChainSpec.model_validate(post.metadata)
        body = post.content.strip()
        if body and spec.description:
            logger.warning("Frontmatter description overridden by markdown body in %s", source_label)
        self.spec = spec
        self.description = body or spec.description
        self.source = source_label

    def step_definitions(self, environ: Mapping[str, str] | None = None) -> list[StepDefinition]:
        """
        Resolves each step's api_key_env against the environment.
        Raises ValueError naming every variable that is unset or empty.
        """
        env = os.environ if environ is None else environ
        missing = [step.api_key_env for step in self.spec.steps if not env.get(step.api_key_env)]
        if missing:
            raise ValueError(f"Missing API key env vars for chain {self.spec.name!r}: {', '.join(missing)}")
        return [
            StepDefinition(
                name=step.name,
                workflow_id=step.workflow_id,
                api_key=env[step.api_key_env],
                inputs=dict(step.inputs),
                allow_user_edit=step.allow_user_edit,
            )
            for step in self.spec.steps
        ]


def load_chain_frontmatter(chain: Path | str) -> tuple[frontmatter.Post, str]:
    if isinstance(chain, Path):
        post = frontmatter.load(str(chain))
        return post, str(chain)
    chain_path = Path(chain)
    if "\n" not in chain and chain_path.exists():
        post = frontmatter.load(str(chain_path))
        return post, str(chain_path)
    post = frontmatter.loads(chain)
    return post, "<inline>"

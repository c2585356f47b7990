"""Discovery of chain definition files."""

from __future__ import annotations

import logging
from pathlib import Path

from workflow_chain.models.loaded_chain_file import LoadedChainFile


logger = logging.getLogger(__name__)


class ChainRegistry:
    def __init__(self, chain_roots: list[Path]):
        self.chain_roots = chain_roots
        self._cache: dict[str, LoadedChainFile] = {}
        self._index: dict[str, Path] | None = None

    def _build_index(self) -> dict[str, Path]:
        index: dict[str, Path] = {}
        for root in self.chain_roots:
            if not root.exists():
                continue
            for path in sorted(root.rglob("*.md")):
                chain_name = path.stem
                if chain_name in index:
                    logger.warning("Chain %s at %s is shadowed by %s", chain_name, path, index[chain_name])
                    continue
                index[chain_name] = path
        return index

    def _get_index(self) -> dict[str, Path]:
        if self._index is None:
            self._index = self._build_index()
        return self._index

    def list_chains(self) -> list[str]:
        index = self._get_index()
        return sorted(index.keys())

    def get(self, chain_name: str) -> LoadedChainFile:
        if chain_name in self._cache:
            return self._cache[chain_name]
        index = self._get_index()
        path = index.get(chain_name)
        if path is None:
            raise FileNotFoundError(f"Chain not found: {chain_name} (searched: {self.chain_roots})")
        loaded = LoadedChainFile(path)
        self._cache[chain_name] = loaded
        return loaded

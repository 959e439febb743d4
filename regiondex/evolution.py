"""
Evolution lineage for a single record.

The remote evolution chain is a tree of species links. It is walked with an
explicit stack rather than recursion, resolving every link to a full record.
The result keeps both the tree (for branching layouts) and its pre-order
linearization (for a simple left-to-right strip).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from .datasource import DataSource
from .errors import DataSourceError
from .models import ChainLink, Record

logger = logging.getLogger(__name__)


@dataclass
class EvolutionNode:
    record: Record
    evolution_details: Tuple[object, ...] = ()
    children: List["EvolutionNode"] = field(default_factory=list)


@dataclass(frozen=True)
class EvolutionStage:
    record: Record
    evolution_details: Tuple[object, ...] = ()
    is_current: bool = False


@dataclass(frozen=True)
class EvolutionChain:
    root: EvolutionNode | None = None
    stages: Tuple[EvolutionStage, ...] = ()

    def __len__(self) -> int:
        return len(self.stages)

    def __iter__(self):
        return iter(self.stages)

    @property
    def is_empty(self) -> bool:
        return not self.stages

    @property
    def does_not_evolve(self) -> bool:
        return len(self.stages) == 1

    def paths(self) -> List[List[EvolutionNode]]:
        """Every root-to-leaf path through the tree, left to right."""
        if self.root is None:
            return []
        paths: List[List[EvolutionNode]] = []
        stack: List[Tuple[EvolutionNode, List[EvolutionNode]]] = [(self.root, [])]
        while stack:
            node, trail = stack.pop()
            chain = trail + [node]
            if not node.children:
                paths.append(chain)
                continue
            for child in reversed(node.children):
                stack.append((child, chain))
        return paths


EMPTY_CHAIN = EvolutionChain()


class EvolutionTreeResolver:
    def __init__(self, source: DataSource) -> None:
        self.source = source

    def resolve(self, record: Record) -> EvolutionChain:
        try:
            species = self.source.fetch_species(record.id)
        except DataSourceError as exc:
            logger.warning("Could not load species for #%d: %s", record.id, exc)
            return EMPTY_CHAIN
        if not species.evolution_chain_url:
            return EMPTY_CHAIN
        try:
            root_link = self.source.fetch_evolution_chain(species.evolution_chain_url)
        except DataSourceError as exc:
            logger.warning("Could not load evolution chain %s: %s", species.evolution_chain_url, exc)
            return EMPTY_CHAIN
        return self.walk(root_link, current_id=record.id)

    def walk(self, root_link: ChainLink, current_id: int | None = None) -> EvolutionChain:
        """Resolve every link of the tree in pre-order.

        A link whose record cannot be fetched is dropped together with its
        whole subtree; siblings are unaffected.
        """
        root: EvolutionNode | None = None
        stages: List[EvolutionStage] = []
        stack: List[Tuple[ChainLink, EvolutionNode | None]] = [(root_link, None)]
        while stack:
            link, parent = stack.pop()
            try:
                node_record = self.source.fetch_by_id(link.species_id)
            except DataSourceError as exc:
                logger.warning("Skipping evolution subtree at %s: %s", link.species_url, exc)
                continue
            node = EvolutionNode(node_record, link.evolution_details)
            if parent is None:
                root = node
            else:
                parent.children.append(node)
            stages.append(
                EvolutionStage(node_record, link.evolution_details, node_record.id == current_id)
            )
            for child in reversed(link.evolves_to):
                stack.append((child, node))
        return EvolutionChain(root=root, stages=tuple(stages))

"""Disclosure state: the set of expanded node ids.

This is the only mutable state of the explorer. It is modelled as an
immutable value; every change returns a new state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Iterator

if TYPE_CHECKING:
    from chemoderma.graph.core import FlatGraph


@dataclass(frozen=True)
class DisclosureState:
    """Set of expanded node ids with toggle semantics.

    Ids are never validated against a graph: toggling an unknown id is safe
    and toggling any id twice restores the original membership.

    Example:
        >>> s = DisclosureState().toggle("root")
        >>> "root" in s
        True
        >>> s.toggle("root") == DisclosureState()
        True
    """

    expanded: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, node_ids: Iterable[str]) -> DisclosureState:
        return cls(frozenset(node_ids))

    @classmethod
    def fully_expanded(cls, graph: FlatGraph) -> DisclosureState:
        """State in which every node of ``graph`` is expanded."""
        return cls(frozenset(node.id for node in graph.nodes))

    def is_expanded(self, node_id: str) -> bool:
        return node_id in self.expanded

    def toggle(self, node_id: str) -> DisclosureState:
        """Flip membership of ``node_id``."""
        if node_id in self.expanded:
            return DisclosureState(self.expanded - {node_id})
        return DisclosureState(self.expanded | {node_id})

    def expand(self, node_id: str) -> DisclosureState:
        if node_id in self.expanded:
            return self
        return DisclosureState(self.expanded | {node_id})

    def collapse(self, node_id: str) -> DisclosureState:
        if node_id not in self.expanded:
            return self
        return DisclosureState(self.expanded - {node_id})

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.expanded

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.expanded))

    def __len__(self) -> int:
        return len(self.expanded)


def toggle(state: DisclosureState, node_id: str) -> DisclosureState:
    """Functional form of :meth:`DisclosureState.toggle`."""
    return state.toggle(node_id)


def is_expanded(state: DisclosureState, node_id: str) -> bool:
    """Functional form of :meth:`DisclosureState.is_expanded`."""
    return state.is_expanded(node_id)

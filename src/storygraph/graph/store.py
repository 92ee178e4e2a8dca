"""Graph storage backend protocol and dict-based implementation.

The GraphStore protocol defines the low-level storage operations that
StoryGraph delegates to. Implementations handle raw CRUD; StoryGraph
provides the public API with endpoint validation and error reporting.

DictGraphStore is the default backend: an insertion-ordered node set and an
ordered outgoing neighbor list per node.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping


@runtime_checkable
class GraphStore(Protocol):
    """Storage backend protocol for StoryGraph.

    Methods raise no domain-specific errors. StoryGraph is responsible for
    checking endpoints and raising UnknownNodeError.
    """

    # -- Nodes -----------------------------------------------------------------

    def has_node(self, node_id: int) -> bool:
        """Check whether a node exists."""
        ...

    def add_node(self, node_id: int) -> None:
        """Add a node if absent. No-op when it already exists."""
        ...

    def delete_node(self, node_id: int) -> None:
        """Delete a node and its outgoing list. No cascade to other lists."""
        ...

    def all_node_ids(self) -> list[int]:
        """Return all node IDs in insertion order."""
        ...

    def node_count(self) -> int:
        """Return total number of nodes."""
        ...

    # -- Edges -----------------------------------------------------------------

    def append_neighbor(self, from_id: int, to_id: int) -> None:
        """Append *to_id* to the outgoing list of *from_id* (no validation)."""
        ...

    def remove_neighbor(self, from_id: int, to_id: int) -> bool:
        """Remove the first occurrence of *to_id*. Return True if removed."""
        ...

    def get_neighbors(self, node_id: int) -> list[int]:
        """Return a copy of the outgoing list (empty if none)."""
        ...

    def remove_references(self, node_id: int) -> int:
        """Remove every occurrence of *node_id* from all outgoing lists.

        Returns the number of entries removed.
        """
        ...

    def edge_count(self) -> int:
        """Return total number of edges, parallel edges included."""
        ...

    def adjacency(self) -> Mapping[int, list[int]]:
        """Return a read-only view of the outgoing adjacency."""
        ...


class DictGraphStore:
    """In-memory dict-based graph store.

    Nodes are kept as keys of a dict so iteration follows insertion order
    and stays stable until the next mutation. Outgoing lists only exist for
    nodes that have at least one edge.
    """

    def __init__(self) -> None:
        self._nodes: dict[int, None] = {}
        self._adjacency: dict[int, list[int]] = {}

    # -- Nodes -----------------------------------------------------------------

    def has_node(self, node_id: int) -> bool:
        return node_id in self._nodes

    def add_node(self, node_id: int) -> None:
        self._nodes.setdefault(node_id, None)

    def delete_node(self, node_id: int) -> None:
        self._nodes.pop(node_id, None)
        self._adjacency.pop(node_id, None)

    def all_node_ids(self) -> list[int]:
        return list(self._nodes)

    def node_count(self) -> int:
        return len(self._nodes)

    # -- Edges -----------------------------------------------------------------

    def append_neighbor(self, from_id: int, to_id: int) -> None:
        self._adjacency.setdefault(from_id, []).append(to_id)

    def remove_neighbor(self, from_id: int, to_id: int) -> bool:
        neighbors = self._adjacency.get(from_id)
        if not neighbors or to_id not in neighbors:
            return False
        neighbors.remove(to_id)
        if not neighbors:
            del self._adjacency[from_id]
        return True

    def get_neighbors(self, node_id: int) -> list[int]:
        return list(self._adjacency.get(node_id, ()))

    def remove_references(self, node_id: int) -> int:
        removed = 0
        for from_id in list(self._adjacency):
            neighbors = self._adjacency[from_id]
            kept = [n for n in neighbors if n != node_id]
            if len(kept) == len(neighbors):
                continue
            removed += len(neighbors) - len(kept)
            if kept:
                self._adjacency[from_id] = kept
            else:
                del self._adjacency[from_id]
        return removed

    def edge_count(self) -> int:
        return sum(len(neighbors) for neighbors in self._adjacency.values())

    def adjacency(self) -> Mapping[int, list[int]]:
        return MappingProxyType(self._adjacency)

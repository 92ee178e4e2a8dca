"""Story graph: the node/edge container owned by the editor.

The graph enforces referential integrity on edges:
- Node insertion and removal are idempotent and never fail
- Removing a node also removes every edge pointing at it
- Edges require both endpoints to exist (UnknownNodeError otherwise)

Cycle checks are exposed as read-only queries. The editor asks
would_create_cycle() before committing a connection and detect_cycles()
when validating the whole graph; the graph itself never refuses an edge
because of a cycle.

StoryGraph delegates storage to a GraphStore backend (DictGraphStore by
default).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from storygraph.graph.algorithms import detect_cycles, find_self_loops, would_create_cycle
from storygraph.graph.errors import UnknownNodeError
from storygraph.graph.store import DictGraphStore, GraphStore

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping


class StoryGraph:
    """Directed multigraph over opaque 64-bit node identifiers.

    Not thread-safe. Owners sharing a graph across threads must serialize
    every call themselves.

    Attributes:
        _store: The underlying storage backend.
    """

    def __init__(self, *, store: GraphStore | None = None) -> None:
        self._store: GraphStore = store if store is not None else DictGraphStore()

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple[int, int]],
        nodes: Iterable[int] = (),
    ) -> StoryGraph:
        """Build a graph from explicit nodes plus edge endpoints.

        Nodes named only by an edge are inserted in first-seen order after
        the explicit ones.
        """
        graph = cls()
        for node_id in nodes:
            graph.insert_node(node_id)
        edge_list = list(edges)
        for from_id, to_id in edge_list:
            graph.insert_node(from_id)
            graph.insert_node(to_id)
        for from_id, to_id in edge_list:
            graph.insert_edge(from_id, to_id)
        return graph

    # -------------------------------------------------------------------------
    # Node Operations
    # -------------------------------------------------------------------------

    def insert_node(self, node_id: int) -> None:
        """Add a node. Inserting an existing node is a no-op."""
        self._store.add_node(node_id)

    def remove_node(self, node_id: int) -> None:
        """Remove a node together with all edges from or to it.

        Removing an absent node is a no-op.
        """
        self._store.remove_references(node_id)
        self._store.delete_node(node_id)

    def has_node(self, node_id: int) -> bool:
        return self._store.has_node(node_id)

    def nodes(self) -> Iterator[int]:
        """Iterate node IDs in insertion order.

        The order is stable until the next mutation.
        """
        return iter(self._store.all_node_ids())

    def node_count(self) -> int:
        return self._store.node_count()

    # -------------------------------------------------------------------------
    # Edge Operations
    # -------------------------------------------------------------------------

    def insert_edge(self, from_id: int, to_id: int) -> None:
        """Append an edge ``from_id -> to_id``.

        Parallel edges are allowed and kept in authoring order. No cycle
        check happens here; call :meth:`would_create_cycle` first if the
        edge must keep the graph acyclic.

        Raises:
            UnknownNodeError: If either endpoint is not in the graph. The
                source is checked first.
        """
        if not self._store.has_node(from_id):
            raise UnknownNodeError(
                from_id,
                role="from",
                available=self._store.all_node_ids(),
                context=f"insert_edge {from_id} -> {to_id}",
            )
        if not self._store.has_node(to_id):
            raise UnknownNodeError(
                to_id,
                role="to",
                available=self._store.all_node_ids(),
                context=f"insert_edge {from_id} -> {to_id}",
            )
        self._store.append_neighbor(from_id, to_id)

    def remove_edge(self, from_id: int, to_id: int) -> bool:
        """Remove the first ``from_id -> to_id`` edge.

        Returns:
            True if an edge was removed, False if none matched.
        """
        return self._store.remove_neighbor(from_id, to_id)

    def neighbors(self, node_id: int) -> list[int]:
        """Return the ordered outgoing neighbors of a node.

        Absent nodes and nodes without edges yield an empty list. The
        returned list is a copy.
        """
        return self._store.get_neighbors(node_id)

    def edge_count(self) -> int:
        return self._store.edge_count()

    def adjacency(self) -> Mapping[int, list[int]]:
        """Read-only view of the outgoing adjacency, for the algorithms."""
        return self._store.adjacency()

    # -------------------------------------------------------------------------
    # Cycle Queries
    # -------------------------------------------------------------------------

    def would_create_cycle(self, from_id: int, to_id: int) -> bool:
        """Check whether inserting ``from_id -> to_id`` would close a cycle.

        Endpoints do not need to be in the graph yet.
        """
        return would_create_cycle(self._store.adjacency(), from_id, to_id)

    def detect_cycles(self) -> list[list[int]]:
        """Return all strongly connected components with two or more nodes."""
        return detect_cycles(self._store.all_node_ids(), self._store.adjacency())

    def self_loops(self) -> list[int]:
        """Return nodes that have an edge to themselves."""
        return find_self_loops(self._store.all_node_ids(), self._store.adjacency())

    # -------------------------------------------------------------------------
    # Utility
    # -------------------------------------------------------------------------

    def __contains__(self, node_id: object) -> bool:
        return isinstance(node_id, int) and self._store.has_node(node_id)

    def __len__(self) -> int:
        return self._store.node_count()

    def __repr__(self) -> str:
        return f"StoryGraph(nodes={self._store.node_count()}, edges={self._store.edge_count()})"

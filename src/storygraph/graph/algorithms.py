"""Story graph algorithms.

Pure functions over a node sequence and an outgoing adjacency mapping.
None of them modify their inputs or keep state between calls. A node that
has no key in the adjacency mapping simply has no outgoing edges, so ids
that were never inserted can be probed safely.

Parallel edges are collapsed by every traversal here: a visited set (or
the Tarjan index) makes a second edge to the same neighbor a no-op.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping, Sequence


def would_create_cycle(
    adjacency: Mapping[int, Sequence[int]],
    from_id: int,
    to_id: int,
) -> bool:
    """Check whether adding ``from_id -> to_id`` would close a cycle.

    The new edge closes a cycle exactly when ``to_id`` can already reach
    ``from_id``. A self-loop is always a cycle. Cycles elsewhere in the
    graph that the new edge does not touch are irrelevant.

    Args:
        adjacency: Outgoing neighbors per node.
        from_id: Source of the proposed edge.
        to_id: Target of the proposed edge.

    Returns:
        True if the edge would introduce a directed cycle.
    """
    if from_id == to_id:
        return True

    visited: set[int] = set()
    stack = [to_id]
    while stack:
        current = stack.pop()
        if current == from_id:
            return True
        if current in visited:
            continue
        visited.add(current)
        for succ in adjacency.get(current, ()):
            if succ not in visited:
                stack.append(succ)

    return False


def detect_cycles(
    nodes: Iterable[int],
    adjacency: Mapping[int, Sequence[int]],
) -> list[list[int]]:
    """Find every strongly connected component with more than one node.

    Tarjan's algorithm, driven by iterating ``nodes`` in order. The
    traversal uses an explicit work stack of ``(node, successor iterator)``
    frames instead of recursion, so long chains cannot exhaust the
    interpreter stack. Components come out in the same order and with the
    same member order (stack-pop order) as the recursive formulation.

    Single-node components are never reported, including nodes that only
    loop to themselves; see :func:`find_self_loops` for those.

    Args:
        nodes: Node IDs to start traversals from.
        adjacency: Outgoing neighbors per node.

    Returns:
        Disjoint components, each a list of node IDs.
    """
    index: dict[int, int] = {}
    lowlink: dict[int, int] = {}
    on_stack: set[int] = set()
    stack: list[int] = []
    components: list[list[int]] = []
    counter = 0

    for root in nodes:
        if root in index:
            continue

        index[root] = lowlink[root] = counter
        counter += 1
        stack.append(root)
        on_stack.add(root)
        work: list[tuple[int, Iterator[int]]] = [(root, iter(adjacency.get(root, ())))]

        while work:
            node, successors = work[-1]
            for succ in successors:
                if succ not in index:
                    # Enter the child; this frame resumes from the same iterator.
                    index[succ] = lowlink[succ] = counter
                    counter += 1
                    stack.append(succ)
                    on_stack.add(succ)
                    work.append((succ, iter(adjacency.get(succ, ()))))
                    break
                if succ in on_stack:
                    lowlink[node] = min(lowlink[node], index[succ])
            else:
                work.pop()
                if work:
                    parent = work[-1][0]
                    lowlink[parent] = min(lowlink[parent], lowlink[node])

                if lowlink[node] == index[node]:
                    component: list[int] = []
                    while True:
                        member = stack.pop()
                        on_stack.discard(member)
                        component.append(member)
                        if member == node:
                            break
                    if len(component) > 1:
                        components.append(component)

    return components


def find_self_loops(
    nodes: Iterable[int],
    adjacency: Mapping[int, Sequence[int]],
) -> list[int]:
    """Return nodes with an edge to themselves, once each, in node order."""
    seen: set[int] = set()
    loops: list[int] = []
    for node in nodes:
        if node in seen:
            continue
        seen.add(node)
        if node in adjacency.get(node, ()):
            loops.append(node)
    return loops


def find_unreachable_nodes(
    nodes: Iterable[int],
    adjacency: Mapping[int, Sequence[int]],
    entries: Iterable[int],
) -> list[int]:
    """Find nodes that cannot be reached from any entry node.

    Entry nodes themselves count as reached. With no entry nodes at all,
    every node is unreachable.

    Args:
        nodes: All node IDs, in reporting order.
        adjacency: Outgoing neighbors per node.
        entries: Starting points of the story.

    Returns:
        Unreached node IDs in the order of ``nodes``.
    """
    visited: set[int] = set()
    queue = deque(entries)
    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)
        for succ in adjacency.get(current, ()):
            if succ not in visited:
                queue.append(succ)

    return [node for node in dict.fromkeys(nodes) if node not in visited]


def find_dead_ends(
    nodes: Iterable[int],
    adjacency: Mapping[int, Sequence[int]],
    terminals: Iterable[int] = (),
    entries: Iterable[int] = (),
) -> list[int]:
    """Find nodes with no outgoing edge that are not marked as endings.

    A graph consisting of a single entry node is a story still being
    started, so that node is not reported.

    Args:
        nodes: All node IDs, in reporting order.
        adjacency: Outgoing neighbors per node.
        terminals: Nodes that legitimately end the story.
        entries: Entry nodes.

    Returns:
        Dead-end node IDs in the order of ``nodes``.
    """
    ordered = list(dict.fromkeys(nodes))
    terminal_set = set(terminals)
    entry_set = set(entries)

    dead_ends: list[int] = []
    for node in ordered:
        if adjacency.get(node) or node in terminal_set:
            continue
        if node in entry_set and len(ordered) == 1:
            continue
        dead_ends.append(node)
    return dead_ends

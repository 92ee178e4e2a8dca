"""Whole-graph structural validation.

Runs the structural analyses over a StoryGraph and collects the results into
a ValidationReport. Checks, in order:

1. entry_point: a non-empty graph needs at least one entry node (fail)
2. cycles: one check per strongly connected component of 2+ nodes (fail)
3. self_loops: nodes with an edge to themselves (fail)
4. unreachable_nodes: nodes no entry node can reach (warn)
5. dead_ends: non-ending nodes without outgoing edges (warn)

Each enabled check that finds nothing contributes a single "pass" entry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from storygraph.config import ValidationConfig
from storygraph.graph.algorithms import (
    detect_cycles,
    find_dead_ends,
    find_self_loops,
    find_unreachable_nodes,
)
from storygraph.graph.validation_types import ValidationCheck, ValidationReport
from storygraph.observability.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from storygraph.graph.graph import StoryGraph

log = get_logger(__name__)


def sort_components(components: list[list[int]]) -> list[list[int]]:
    """Sort members of each component, then components by smallest member."""
    return sorted((sorted(c) for c in components), key=lambda c: c[0])


def _label(node_id: int, titles: Mapping[int, str]) -> str:
    title = titles.get(node_id)
    return f"{title} ({node_id})" if title else str(node_id)


def _labels(node_ids: Iterable[int], titles: Mapping[int, str], sep: str = ", ") -> str:
    return sep.join(_label(n, titles) for n in node_ids)


def validate_story_graph(
    graph: StoryGraph,
    *,
    entries: Iterable[int] = (),
    terminals: Iterable[int] = (),
    titles: Mapping[int, str] | None = None,
    config: ValidationConfig | None = None,
) -> ValidationReport:
    """Validate the structure of a story graph.

    Args:
        graph: Graph to validate. It is not modified.
        entries: Entry (start) nodes of the story.
        terminals: Nodes that legitimately end the story.
        titles: Optional display names used in messages.
        config: Which checks to run. Defaults to all of them.

    Returns:
        ValidationReport with one or more checks per enabled analysis.
    """
    config = config or ValidationConfig()
    titles = titles or {}
    nodes = list(graph.nodes())
    adjacency = graph.adjacency()
    entry_ids = [e for e in dict.fromkeys(entries) if graph.has_node(e)]
    terminal_ids = list(terminals)

    report = ValidationReport()

    if config.require_entry:
        if nodes and not entry_ids:
            report.checks.append(
                ValidationCheck(
                    name="entry_point",
                    severity="fail",
                    message="No entry node defined. Mark one node as the starting point.",
                )
            )
        else:
            report.checks.append(
                ValidationCheck(
                    name="entry_point",
                    severity="pass",
                    message=f"{len(entry_ids)} entry node(s)",
                    node_ids=entry_ids,
                )
            )

    if config.report_cycles:
        cycles = detect_cycles(nodes, adjacency)
        if config.sort_components:
            cycles = sort_components(cycles)
        for component in cycles:
            report.checks.append(
                ValidationCheck(
                    name="cycles",
                    severity="fail",
                    message=f"Cycle detected: {_labels(component, titles, ' -> ')}",
                    node_ids=component,
                )
            )
        if not cycles:
            report.checks.append(ValidationCheck(name="cycles", severity="pass"))

    if config.report_self_loops:
        loops = find_self_loops(nodes, adjacency)
        if loops:
            report.checks.append(
                ValidationCheck(
                    name="self_loops",
                    severity="fail",
                    message=f"Nodes connected to themselves: {_labels(loops, titles)}",
                    node_ids=loops,
                )
            )
        else:
            report.checks.append(ValidationCheck(name="self_loops", severity="pass"))

    if config.report_unreachable:
        # Without entry nodes every node would be flagged; entry_point covers that.
        unreachable = find_unreachable_nodes(nodes, adjacency, entry_ids) if entry_ids else []
        if unreachable:
            report.checks.append(
                ValidationCheck(
                    name="unreachable_nodes",
                    severity="warn",
                    message=f"Unreachable nodes: {_labels(unreachable, titles)}",
                    node_ids=unreachable,
                )
            )
        else:
            report.checks.append(ValidationCheck(name="unreachable_nodes", severity="pass"))

    if config.report_dead_ends:
        dead_ends = find_dead_ends(nodes, adjacency, terminal_ids, entry_ids)
        if dead_ends:
            report.checks.append(
                ValidationCheck(
                    name="dead_ends",
                    severity="warn",
                    message=f"Dead ends (no outgoing connections): {_labels(dead_ends, titles)}",
                    node_ids=dead_ends,
                )
            )
        else:
            report.checks.append(ValidationCheck(name="dead_ends", severity="pass"))

    log.info(
        "graph_validated",
        nodes=len(nodes),
        edges=graph.edge_count(),
        failures=len(report.failures()),
        warnings=len(report.warnings()),
    )
    return report

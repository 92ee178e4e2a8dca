"""Graph package - story graph core.

The store holds nodes and ordered outgoing edges; the algorithms answer the
two questions the editor keeps asking: "would this connection close a
cycle?" and "which groups of nodes currently form cycles?".
"""

from storygraph.graph.algorithms import (
    detect_cycles,
    find_dead_ends,
    find_self_loops,
    find_unreachable_nodes,
    would_create_cycle,
)
from storygraph.graph.document import (
    GraphDocument,
    GraphDocumentError,
    StoryEdge,
    StoryNode,
    load_graph_document,
)
from storygraph.graph.errors import GraphIntegrityError, UnknownNodeError
from storygraph.graph.graph import StoryGraph
from storygraph.graph.store import DictGraphStore, GraphStore
from storygraph.graph.validation import sort_components, validate_story_graph
from storygraph.graph.validation_types import ValidationCheck, ValidationReport

__all__ = [
    "DictGraphStore",
    "GraphDocument",
    "GraphDocumentError",
    "GraphIntegrityError",
    "GraphStore",
    "StoryEdge",
    "StoryGraph",
    "StoryNode",
    "UnknownNodeError",
    "ValidationCheck",
    "ValidationReport",
    "detect_cycles",
    "find_dead_ends",
    "find_self_loops",
    "find_unreachable_nodes",
    "load_graph_document",
    "sort_components",
    "validate_story_graph",
    "would_create_cycle",
]

"""Graph description files.

A graph description is a YAML (or JSON) document listing nodes and edges.
It is read-only input for the command-line tools: loading one builds a
StoryGraph plus the entry/ending markers and titles the validator needs.

Example::

    nodes:
      - id: 1
        title: Prologue
        entry: true
      - id: 2
        title: Ending
        end: true
    edges:
      - [1, 2]
      - {from: 2, to: 1}
"""

from __future__ import annotations

from pathlib import Path  # noqa: TC003 - used at runtime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from ruamel.yaml import YAML

from storygraph.graph.graph import StoryGraph

MAX_NODE_ID = 2**64 - 1


class GraphDocumentError(Exception):
    """Raised when a graph description cannot be loaded."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load graph description {path}: {reason}")


class StoryNode(BaseModel):
    """A node entry in a graph description."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(ge=0, le=MAX_NODE_ID)
    title: str = ""
    entry: bool = False
    end: bool = False


class StoryEdge(BaseModel):
    """A directed edge entry. Accepts ``[from, to]`` pairs or mappings."""

    source: int = Field(ge=0, le=MAX_NODE_ID, alias="from")
    target: int = Field(ge=0, le=MAX_NODE_ID, alias="to")

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _coerce_pair(cls, data: Any) -> Any:
        if isinstance(data, list | tuple):
            if len(data) != 2:
                raise ValueError(f"Edge pair must have exactly 2 items, got {len(data)}")
            return {"from": data[0], "to": data[1]}
        return data


class GraphDocument(BaseModel):
    """A whole graph description."""

    nodes: list[StoryNode] = Field(default_factory=list)
    edges: list[StoryEdge] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_node_ids(self) -> GraphDocument:
        seen: set[int] = set()
        duplicates: list[int] = []
        for node in self.nodes:
            if node.id in seen:
                duplicates.append(node.id)
            seen.add(node.id)
        if duplicates:
            raise ValueError(f"Duplicate node id(s): {', '.join(map(str, duplicates))}")
        return self

    @property
    def entries(self) -> list[int]:
        return [n.id for n in self.nodes if n.entry]

    @property
    def terminals(self) -> list[int]:
        return [n.id for n in self.nodes if n.end]

    @property
    def titles(self) -> dict[int, str]:
        return {n.id: n.title for n in self.nodes if n.title}

    def to_graph(self) -> StoryGraph:
        """Build a StoryGraph from this description.

        Raises:
            UnknownNodeError: If an edge names a node that is not listed.
        """
        graph = StoryGraph()
        for node in self.nodes:
            graph.insert_node(node.id)
        for edge in self.edges:
            graph.insert_edge(edge.source, edge.target)
        return graph


def load_graph_document(path: Path) -> GraphDocument:
    """Load a graph description from a YAML or JSON file.

    Args:
        path: File to read.

    Returns:
        Parsed GraphDocument.

    Raises:
        GraphDocumentError: If the file is missing, empty, malformed, or
            does not match the description schema.
    """
    if not path.exists():
        raise GraphDocumentError(path, "File not found")

    yaml = YAML(typ="safe")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.load(f)
    except Exception as e:
        raise GraphDocumentError(path, str(e)) from e

    if data is None:
        raise GraphDocumentError(path, "Empty file")

    try:
        return GraphDocument.model_validate(data)
    except ValidationError as e:
        raise GraphDocumentError(path, str(e)) from e

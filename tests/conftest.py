"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from storygraph.graph.graph import StoryGraph

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def clear_sg_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep SG_* settings from the developer's shell out of test runs."""
    import os

    for name in list(os.environ):
        if name.startswith("SG_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def chain_graph() -> StoryGraph:
    """Linear chain 1 -> 2 -> 3."""
    return StoryGraph.from_edges([(1, 2), (2, 3)])


@pytest.fixture
def story_file(tmp_path: Path) -> Path:
    """A small valid description: prologue branches to two endings."""
    path = tmp_path / "story.yaml"
    path.write_text(
        """\
nodes:
  - {id: 1, title: Prologue, entry: true}
  - {id: 2, title: Forest}
  - {id: 3, title: Good Ending, end: true}
  - {id: 4, title: Bad Ending, end: true}
edges:
  - [1, 2]
  - [2, 3]
  - {from: 2, to: 4}
""",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def cyclic_story_file(tmp_path: Path) -> Path:
    """A description where nodes 2 and 3 loop back onto each other."""
    path = tmp_path / "loop.yaml"
    path.write_text(
        """\
nodes:
  - {id: 1, title: Start, entry: true}
  - {id: 2, title: Hall}
  - {id: 3, title: Stairs}
  - {id: 4, title: End, end: true}
edges:
  - [1, 2]
  - [2, 3]
  - [3, 2]
  - [3, 4]
""",
        encoding="utf-8",
    )
    return path

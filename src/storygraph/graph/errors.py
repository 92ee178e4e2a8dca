"""Graph integrity error types.

These errors are raised when a graph operation violates referential
integrity, similar to foreign key violations in a database. Each error can
format itself as an actionable diagnostic for the editor or the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


class GraphIntegrityError(Exception):
    """Base class for graph integrity violations.

    Subclasses must implement to_feedback() to provide an actionable
    diagnostic message.
    """

    def to_feedback(self) -> str:
        """Format error as an actionable diagnostic.

        Returns:
            Markdown text explaining what is wrong and how to fix it.
        """
        raise NotImplementedError


@dataclass
class UnknownNodeError(GraphIntegrityError):
    """Raised when an edge references a node that is not in the graph.

    Both endpoints must be inserted before an edge can connect them.
    When both are missing, the source is reported.

    Attributes:
        node_id: The identifier that was referenced but does not exist.
        role: Which endpoint was missing ("from" or "to").
        available: Node IDs present at the time of the failure.
        context: Description of where the reference occurred.
    """

    node_id: int
    role: Literal["from", "to"] = "from"
    available: list[int] = field(default_factory=list)
    context: str = ""

    def __post_init__(self) -> None:
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        endpoint = "source" if self.role == "from" else "target"
        msg = f"Unknown {endpoint} node {self.node_id}"
        if self.context:
            msg += f" ({self.context})"
        return msg

    def to_feedback(self) -> str:
        endpoint = "Source" if self.role == "from" else "Target"
        lines = [
            "## Error: Unknown Node",
            "",
            f"**{endpoint} node**: `{self.node_id}`",
        ]
        if self.context:
            lines.append(f"**Context**: {self.context}")
        lines.extend(
            [
                "",
                "**Problem**: This node does not exist in the graph.",
                "",
            ]
        )

        if self.available:
            lines.append("**Known node IDs**:")
            for a in sorted(self.available)[:20]:
                lines.append(f"  - `{a}`")
            if len(self.available) > 20:
                lines.append(f"  - ... and {len(self.available) - 20} more")
            lines.append("")

        lines.append("**Solution**: Insert the node before connecting it.")
        return "\n".join(lines)

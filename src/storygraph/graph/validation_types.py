"""Validation result types shared by the validator and the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

Severity = Literal["pass", "warn", "fail"]


@dataclass
class ValidationCheck:
    """Result of a single validation check.

    Attributes:
        name: Identifier for the check (e.g. "cycles").
        severity: "pass", "warn", or "fail".
        message: Human-readable description of the result.
        node_ids: Nodes the finding is about, empty for passing checks.
    """

    name: str
    severity: Severity
    message: str = ""
    node_ids: list[int] = field(default_factory=list)


@dataclass
class ValidationReport:
    """Aggregated results of validation checks."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        """True if any check has severity 'fail'."""
        return any(c.severity == "fail" for c in self.checks)

    @property
    def has_warnings(self) -> bool:
        """True if any check has severity 'warn'."""
        return any(c.severity == "warn" for c in self.checks)

    def failures(self) -> list[ValidationCheck]:
        return [c for c in self.checks if c.severity == "fail"]

    def warnings(self) -> list[ValidationCheck]:
        return [c for c in self.checks if c.severity == "warn"]

    @property
    def summary(self) -> str:
        """Human-readable summary of all checks."""
        fails = self.failures()
        warns = self.warnings()
        passes = [c for c in self.checks if c.severity == "pass"]

        parts: list[str] = []
        if fails:
            parts.append(f"{len(fails)} failed")
        if warns:
            parts.append(f"{len(warns)} warnings")
        if passes:
            parts.append(f"{len(passes)} passed")
        return ", ".join(parts) or "no checks run"

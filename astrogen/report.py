"""Advisory outcome reporting for patch runs.

Provides Pydantic v2 models describing what happened to each target file and
a Rich renderer for the aggregated report.  These lines are informational;
callers detect "nothing changed" from them without relying on exceptions.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, computed_field
from rich.markup import escape
from rich.table import Table

from astrogen.utils import console


# ---------------------------------------------------------------------------
# Per-file outcome
# ---------------------------------------------------------------------------

class PatchStatus(str, Enum):
    """What a patch run did to one target file."""
    UPDATED = "updated"
    UNCHANGED = "already satisfied"
    MISSING = "target not found"
    SKIPPED = "nothing requested"


_STATUS_STYLES: dict[PatchStatus, str] = {
    PatchStatus.UPDATED: "green",
    PatchStatus.UNCHANGED: "cyan",
    PatchStatus.MISSING: "yellow",
    PatchStatus.SKIPPED: "dim",
}


class PatchOutcome(BaseModel):
    """The result of patching (or trying to patch) a single file."""

    target: str = Field(..., description="Short label, e.g. 'app.js'")
    path: str = Field(..., description="Path of the target file")
    status: PatchStatus
    detail: str = Field(default="", description="Extra context for the report line")

    def line(self) -> str:
        """Render the outcome as one human-readable report line."""
        text = f"{self.target}: {self.status.value} ({self.path})"
        return f"{text} - {self.detail}" if self.detail else text


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------

class PatchReport(BaseModel):
    """Outcomes of one request, in the order the files were processed."""

    outcomes: list[PatchOutcome] = Field(default_factory=list)

    def add(self, outcome: PatchOutcome) -> PatchOutcome:
        self.outcomes.append(outcome)
        return outcome

    def lines(self) -> list[str]:
        return [outcome.line() for outcome in self.outcomes]

    @computed_field  # type: ignore[misc]
    @property
    def changed(self) -> bool:
        """True when at least one file was rewritten."""
        return any(o.status == PatchStatus.UPDATED for o in self.outcomes)

    @computed_field  # type: ignore[misc]
    @property
    def missing(self) -> list[str]:
        """Paths of targets that did not exist."""
        return [o.path for o in self.outcomes if o.status == PatchStatus.MISSING]


def print_report(report: PatchReport, title: str = "Patch report") -> None:
    """Render *report* as a Rich table on the shared console."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Target", no_wrap=True)
    table.add_column("Status")
    table.add_column("Path", style="dim")
    table.add_column("Detail")

    for outcome in report.outcomes:
        style = _STATUS_STYLES.get(outcome.status, "white")
        table.add_row(
            outcome.target,
            f"[{style}]{outcome.status.value}[/{style}]",
            escape(outcome.path),
            escape(outcome.detail),
        )

    console.print(table)
    console.print()

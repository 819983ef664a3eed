"""
Liveforge Plan - Which template goes where

A GenerationPlan is built fresh for every invocation and consumed by the
conflict prompt and the materializer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class CopyMode(str, Enum):
    ALWAYS = "always"        # write, after conflict confirmation
    IF_ABSENT = "if_absent"  # write only when the destination does not exist


@dataclass(frozen=True)
class PlannedFile:
    """One template to render and its destination."""

    template: str  # Template id relative to the templates dir, without .j2
    destination: Path
    mode: CopyMode = CopyMode.ALWAYS


@dataclass(frozen=True)
class GenerationPlan:
    """Ordered plan entries. Order only matters for display."""

    entries: tuple[PlannedFile, ...] = ()

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __add__(self, other: "GenerationPlan") -> "GenerationPlan":
        return GenerationPlan(self.entries + other.entries)

    def paths(self) -> list[Path]:
        return [e.destination for e in self.entries]


@dataclass
class GenerationResult:
    """Files written and skipped by one materialization."""

    written: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)

    def merge(self, other: "GenerationResult") -> "GenerationResult":
        return GenerationResult(self.written + other.written, self.skipped + other.skipped)

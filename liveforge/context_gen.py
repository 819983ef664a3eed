"""
Liveforge Context Generator - Context module, schema, tests and fixtures

Creates the data-access layer for a resource. When the context module
already exists, the resource's functions are appended to it (and to its
test and fixtures modules) instead of replacing them.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from rich.console import Console

from liveforge.injector import inject_before_final_end
from liveforge.plan import CopyMode, GenerationPlan, GenerationResult, PlannedFile
from liveforge.project import ProjectLayout
from liveforge.spec import Context

if TYPE_CHECKING:
    from liveforge.generator import Materializer

console = Console()

# Full-module template -> fragment injected into an existing module
INJECTABLE = {
    "context/context.ex": "context/functions.ex",
    "context/context_test.exs": "context/test_cases.exs",
    "context/fixtures.ex": "context/fixture_functions.ex",
}


class ContextGenerator:
    """Plans and writes the context-layer files of a resource."""

    def __init__(self, layout: ProjectLayout, materializer: "Materializer"):
        self.layout = layout
        self.materializer = materializer

    def files_to_be_generated(self, context: Context) -> GenerationPlan:
        if not context.generate:
            return GenerationPlan()

        entries: list[PlannedFile] = []
        if context.schema.generate:
            entries.append(PlannedFile("context/schema.ex", context.schema.file))

        entries.extend([
            PlannedFile("context/context.ex", context.file, CopyMode.IF_ABSENT),
            PlannedFile("context/context_test.exs", context.test_file, CopyMode.IF_ABSENT),
            PlannedFile("context/fixtures.ex", context.test_fixtures_file, CopyMode.IF_ABSENT),
        ])
        return GenerationPlan(tuple(entries))

    def fragments(self, context: Context) -> list[str]:
        """Templates appended to modules that already exist."""
        return [
            INJECTABLE[entry.template]
            for entry in self.files_to_be_generated(context)
            if entry.template in INJECTABLE
        ]

    def copy_new_files(self, context: Context, binding: Mapping[str, Any]) -> GenerationResult:
        """Write new modules, then append to the ones that already existed."""
        plan = self.files_to_be_generated(context)
        result = self.materializer.materialize(plan, binding)

        by_path = {entry.destination: entry for entry in plan}
        for path in result.skipped:
            fragment = INJECTABLE.get(by_path[path].template)
            if fragment is not None:
                self._inject(path, fragment, binding)

        return result

    def _inject(self, path: Path, fragment: str, binding: Mapping[str, Any]) -> None:
        code = self.materializer.render(fragment, binding)
        if inject_before_final_end(path, code):
            console.print(f"[yellow]* injecting[/yellow] {self.layout.relative(path)}")
        else:
            console.print(f"[yellow]* skipping[/yellow] {self.layout.relative(path)} (already up to date)")

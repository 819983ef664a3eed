"""
Liveforge Conflicts - Confirms overwrites before anything is written

All files the invocation will touch are checked in one batch. A single
refusal aborts the whole run, so no file is ever half-generated.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import Enum
from pathlib import Path

import typer
from rich.console import Console

from liveforge.errors import ConflictAborted
from liveforge.plan import CopyMode, PlannedFile

console = Console()

Confirm = Callable[[str], bool]


class Confirmed(str, Enum):
    CONFIRMED = "confirmed"


def _default_confirm(question: str) -> bool:
    return typer.confirm(question, default=False)


def conflicting_paths(entries: Iterable[PlannedFile | Path]) -> list[Path]:
    """Planned destinations that already exist on disk."""
    paths: list[Path] = []
    for entry in entries:
        if isinstance(entry, PlannedFile):
            if entry.mode is CopyMode.IF_ABSENT:
                continue
            path = entry.destination
        else:
            path = Path(entry)
        if path.exists() and path not in paths:
            paths.append(path)
    return paths


def prompt_for_conflicts(
    entries: Iterable[PlannedFile | Path],
    confirm: Confirm | None = None,
) -> Confirmed:
    """
    Ask before overwriting any existing file.

    Args:
        entries: Plan entries and/or plain paths for the whole invocation
        confirm: Yes/no prompt, defaults to typer.confirm

    Returns:
        Confirmed.CONFIRMED when there is nothing to overwrite or every
        overwrite was accepted

    Raises:
        ConflictAborted: on the first refused overwrite
    """
    conflicts = conflicting_paths(entries)
    if not conflicts:
        return Confirmed.CONFIRMED

    confirm = confirm or _default_confirm

    console.print("\nThe following files conflict with new files to be generated:\n")
    for path in conflicts:
        console.print(f"  * {path}")
    console.print(
        "\nSee the --web option to namespace similarly named resources\n",
        style="yellow",
    )

    for path in conflicts:
        if not confirm(f"{path} already exists, overwrite?"):
            raise ConflictAborted(path)

    return Confirmed.CONFIRMED


def prompt_for_code_injection(context_file: Path, confirm: Confirm | None = None) -> None:
    """Confirm generating into a context module that already exists."""
    if not context_file.exists():
        return

    confirm = confirm or _default_confirm
    console.print(
        f"\nYou are generating into an existing context.\n\n"
        f"The context {context_file} already exists. New functions will be "
        "appended before its final end.\n",
        style="yellow",
    )
    if not confirm("Would you like to proceed?"):
        raise ConflictAborted(context_file)

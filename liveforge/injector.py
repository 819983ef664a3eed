"""
Liveforge Injector - Idempotent code injection into shared modules
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


COMPONENT_ANCHOR = "use Phoenix.Component"


class InjectionOutcome(str, Enum):
    ALREADY_PRESENT = "already_present"
    INJECTED = "injected"
    ANCHOR_NOT_FOUND = "anchor_not_found"


def inject_import(target_file: Path, import_line: str, anchor_line: str) -> InjectionOutcome:
    """
    Insert *import_line* on the line after the first *anchor_line* in *target_file*.

    The import goes on its own line with the anchor line's indentation. The
    file is left untouched when the import is already there or the anchor
    is missing.
    """
    target_file = Path(target_file)
    source = target_file.read_text(encoding="utf-8")

    if import_line in source:
        return InjectionOutcome.ALREADY_PRESENT

    at = source.find(anchor_line)
    if at < 0:
        return InjectionOutcome.ANCHOR_NOT_FOUND

    line_start = source.rfind("\n", 0, at) + 1
    indent = ""
    for ch in source[line_start:at]:
        if ch not in " \t":
            break
        indent += ch

    end = source.find("\n", at + len(anchor_line))
    if end < 0:
        end = len(source)
    updated = f"{source[:end]}\n{indent}{import_line}{source[end:]}"
    target_file.write_text(updated, encoding="utf-8")
    return InjectionOutcome.INJECTED


def inject_before_final_end(target_file: Path, code: str) -> bool:
    """
    Append *code* inside the module by placing it before the file's last end.

    Returns False without writing when *code* is already present or there is
    no final end.
    """
    target_file = Path(target_file)
    source = target_file.read_text(encoding="utf-8")
    block = code.strip("\n").rstrip()
    if block.strip() in source:
        return False

    stripped = source.rstrip()
    if not stripped.endswith("end"):
        return False

    head = stripped[: -len("end")].rstrip()
    target_file.write_text(f"{head}\n\n{block}\nend\n", encoding="utf-8")
    return True

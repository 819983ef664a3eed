"""
Liveforge Errors - Exception taxonomy for the generators

Every failure the CLI knows how to report derives from LiveforgeError.
"""

from __future__ import annotations


class LiveforgeError(Exception):
    """Base class for generator failures reported to the user."""


class UsageError(LiveforgeError):
    """Invalid invocation or unsupported project layout."""


class ConflictAborted(LiveforgeError):
    """The user declined to overwrite an existing file."""

    def __init__(self, path: object | None = None):
        self.path = path
        if path is None:
            message = "Aborted by user, no files were written"
        else:
            message = f"Aborted by user at {path}, no files were written"
        super().__init__(message)


class RenderError(LiveforgeError):
    """A template could not be rendered against the binding."""

    def __init__(self, template: str, variable: str | None = None, detail: str | None = None):
        self.template = template
        self.variable = variable
        if variable:
            message = f"Template {template!r} references unbound variable {variable!r}"
        else:
            message = f"Template {template!r} could not be rendered"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)

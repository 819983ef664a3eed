"""
Liveforge Bootstrap - Minimal Phoenix web skeleton

Writes just enough of a new project (mix.exs, the web module with its
html_helpers, the root layout and liveforge.yaml) for `liveforge live` to
run against it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from liveforge.conflicts import Confirm, prompt_for_conflicts
from liveforge.errors import UsageError
from liveforge.generator import Materializer
from liveforge.naming import camelize, is_identifier
from liveforge.plan import GenerationPlan, GenerationResult, PlannedFile
from liveforge.translation import new_maybe_gettext


def plan_new_project(app: str, root: Path) -> GenerationPlan:
    web_dir = f"{app}_web"
    return GenerationPlan((
        PlannedFile("new/mix.exs", root / "mix.exs"),
        PlannedFile("new/web.ex", root / "lib" / f"{web_dir}.ex"),
        PlannedFile("new/root.html.heex", root / "lib" / web_dir / "components" / "layouts" / "root.html.heex"),
        PlannedFile("new/liveforge.yaml", root / "liveforge.yaml"),
    ))


def new_binding(app: str, gettext: bool) -> dict[str, Any]:
    app_module = camelize(app)
    return {
        "app": app,
        "app_module": app_module,
        "web_module": f"{app_module}Web",
        "gettext": gettext,
        "new_maybe_gettext": new_maybe_gettext,
    }


def generate_new(
    app: str,
    output_dir: Path,
    gettext: bool = True,
    confirm: Confirm | None = None,
) -> GenerationResult:
    """
    Create the skeleton of a new project in ``output_dir/app``.

    Raises:
        UsageError: when *app* is not a valid OTP application name
        ConflictAborted: when an existing file must not be overwritten
    """
    if not is_identifier(app):
        raise UsageError(f"Application name must start with a letter and have only lowercase letters, numbers and underscore, got {app!r}")

    root = Path(output_dir) / app
    plan = plan_new_project(app, root)
    prompt_for_conflicts(plan, confirm)

    materializer = Materializer(display_root=Path(output_dir))
    return materializer.materialize(plan, new_binding(app, gettext))

"""
Liveforge Generator - Template-based LiveView resource generation

Uses Jinja2 for templating. Plans every destination up front, confirms
overwrites for the whole invocation in one batch, renders each template
fully in memory before writing it, and finally wires the shared component
module into the application's web module.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
    UndefinedError,
    meta,
    select_autoescape,
)
from rich.console import Console
from rich.panel import Panel

from liveforge.conflicts import Confirm, prompt_for_code_injection, prompt_for_conflicts
from liveforge.context_gen import ContextGenerator
from liveforge.errors import RenderError
from liveforge.inputs import inputs
from liveforge.injector import COMPONENT_ANCHOR, InjectionOutcome, inject_import
from liveforge.naming import camelize, humanize, underscore
from liveforge.plan import CopyMode, GenerationPlan, GenerationResult, PlannedFile
from liveforge.project import ProjectLayout
from liveforge.spec import Context
from liveforge.translation import elixir_string, maybe_gettext

console = Console()

TEMPLATES_DIR = Path(__file__).parent / "templates"


# ═══════════════════════════════════════════════════════════════════════════
# JINJA ENVIRONMENT SETUP
# ═══════════════════════════════════════════════════════════════════════════


def create_jinja_env(templates_dirs: list[Path]) -> Environment:
    """Create Jinja2 environment with custom filters."""

    env = Environment(
        loader=FileSystemLoader([str(d) for d in templates_dirs]),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )

    env.filters["camelize"] = camelize
    env.filters["underscore"] = underscore
    env.filters["humanize"] = humanize
    env.filters["inspect"] = elixir_string
    env.filters["elixir_map"] = elixir_map

    return env


def elixir_map(pairs: list[tuple[str, str]]) -> str:
    """Render (key, literal) pairs as an Elixir map with atom keys."""
    return "%{" + ", ".join(f"{key}: {value}" for key, value in pairs) + "}"


# ═══════════════════════════════════════════════════════════════════════════
# MATERIALIZER
# ═══════════════════════════════════════════════════════════════════════════


class Materializer:
    """
    Renders plan entries against a binding and writes them to disk.

    Writes are independent: a failure stops the remaining entries but does
    not remove files that were already written.
    """

    def __init__(self, templates_dir: Path | None = None, display_root: Path | None = None):
        """
        Args:
            templates_dir: Optional directory whose templates take precedence
                over the packaged ones
            display_root: Paths are printed relative to this directory
        """
        dirs = [TEMPLATES_DIR]
        if templates_dir is not None:
            dirs.insert(0, Path(templates_dir))
        self.env = create_jinja_env(dirs)
        self.display_root = display_root

    def _display(self, path: Path) -> str:
        if self.display_root is None:
            return str(path)
        try:
            return str(path.relative_to(self.display_root))
        except ValueError:
            return str(path)

    def check(self, plan: GenerationPlan, binding: Mapping[str, Any]) -> None:
        """Fail before any write if a template is missing or needs an unbound variable."""
        self.check_templates([entry.template for entry in plan], binding)

    def check_templates(self, templates: Iterable[str], binding: Mapping[str, Any]) -> None:
        for template in templates:
            try:
                source, _, _ = self.env.loader.get_source(self.env, f"{template}.j2")
                ast = self.env.parse(source)
            except TemplateNotFound:
                raise RenderError(template, detail="no such template") from None
            except TemplateSyntaxError as exc:
                raise RenderError(template, detail=f"line {exc.lineno}: {exc.message}") from exc

            missing = meta.find_undeclared_variables(ast) - set(binding) - set(self.env.globals)
            if missing:
                raise RenderError(template, variable=sorted(missing)[0])

    def render(self, template: str, binding: Mapping[str, Any]) -> str:
        try:
            return self.env.get_template(f"{template}.j2").render(**binding)
        except TemplateNotFound:
            raise RenderError(template, detail="no such template") from None
        except UndefinedError as exc:
            raise RenderError(template, detail=exc.message) from exc

    def materialize(self, plan: GenerationPlan, binding: Mapping[str, Any]) -> GenerationResult:
        """
        Render and write every entry of *plan*.

        IF_ABSENT entries whose destination exists are skipped silently.

        Raises:
            RenderError: when a template is unknown or references an unbound
                variable; nothing is written for that entry
        """
        self.check(plan, binding)
        result = GenerationResult()

        for entry in plan:
            if entry.mode is CopyMode.IF_ABSENT and entry.destination.exists():
                result.skipped.append(entry.destination)
                continue

            content = self.render(entry.template, binding)
            entry.destination.parent.mkdir(parents=True, exist_ok=True)
            entry.destination.write_text(content, encoding="utf-8")
            console.print(f"[green]* creating[/green] {self._display(entry.destination)}")
            result.written.append(entry.destination)

        return result


# ═══════════════════════════════════════════════════════════════════════════
# PATH PLANNER
# ═══════════════════════════════════════════════════════════════════════════


LIVE_FILES = ("show.ex", "index.ex", "form_component.ex", "index.html.heex", "show.html.heex")


def plan_live_files(context: Context, layout: ProjectLayout) -> GenerationPlan:
    """Destinations for the LiveViews, their templates, test and shared components."""
    schema = context.schema
    namespace = [schema.web_path] if schema.web_path else []

    web_live = layout.web_root.joinpath("live", *namespace, f"{schema.singular}_live")
    test_live = layout.test_root.joinpath("live", *namespace)

    entries = [PlannedFile(f"live/{name}", web_live / name) for name in LIVE_FILES]
    entries.append(PlannedFile("live/live_test.exs", test_live / f"{schema.singular}_live_test.exs"))
    entries.append(
        PlannedFile(
            "live/core_components.ex",
            layout.web_root / "components" / "core_components.ex",
            CopyMode.IF_ABSENT,
        )
    )
    return GenerationPlan(tuple(entries))


# ═══════════════════════════════════════════════════════════════════════════
# LIVE GENERATOR
# ═══════════════════════════════════════════════════════════════════════════


def build_binding(context: Context, gettext: bool) -> dict[str, Any]:
    """Template variables shared by every live and context template."""
    return {
        "context": context,
        "schema": context.schema,
        "inputs": inputs(context.schema, gettext),
        "gettext": gettext,
        "web_namespace": context.web_module,
        "maybe_gettext": maybe_gettext,
    }


class LiveGenerator:
    """
    Generates LiveViews, templates, tests and (optionally) the context for
    one resource.
    """

    def __init__(
        self,
        layout: ProjectLayout,
        templates_dir: Path | None = None,
        confirm: Confirm | None = None,
    ):
        self.layout = layout
        self.confirm = confirm
        self.materializer = Materializer(templates_dir, display_root=layout.root)

    def files_to_be_generated(self, context: Context) -> GenerationPlan:
        return plan_live_files(context, self.layout)

    def run(self, context: Context, gettext: bool = True) -> Context:
        """
        Generate every file for *context* and patch the web module.

        Returns:
            The context, for printing router instructions

        Raises:
            ConflictAborted: when an overwrite is refused; nothing is written
            RenderError: when a template cannot be rendered; every template is
                checked before the first write
        """
        context_gen = ContextGenerator(self.layout, self.materializer)
        binding = build_binding(context, gettext)

        if context.generate:
            prompt_for_code_injection(context.file, self.confirm)

        live_plan = self.files_to_be_generated(context)
        context_plan = context_gen.files_to_be_generated(context)
        self.materializer.check_templates(
            [entry.template for entry in live_plan + context_plan] + context_gen.fragments(context),
            binding,
        )
        prompt_for_conflicts(live_plan + context_plan, self.confirm)

        self.materializer.materialize(live_plan, binding)
        if context.generate:
            context_gen.copy_new_files(context, binding)

        maybe_inject_imports(context, self.layout)
        return context


# ═══════════════════════════════════════════════════════════════════════════
# POST-GENERATION
# ═══════════════════════════════════════════════════════════════════════════


def maybe_inject_imports(context: Context, layout: ProjectLayout) -> InjectionOutcome:
    """Import the shared components into the web module, once."""
    file_path = layout.web_module_file
    inject = f"import {context.web_module}.CoreComponents"

    if not file_path.is_file():
        console.print(f"\n[yellow]Could not find {layout.relative(file_path)}.[/yellow]")
        console.print(_anchor_help(context, file_path))
        return InjectionOutcome.ANCHOR_NOT_FOUND

    outcome = inject_import(file_path, inject, COMPONENT_ANCHOR)

    if outcome is InjectionOutcome.INJECTED:
        console.print(f"[green]* injecting[/green] {layout.relative(file_path)}")
    elif outcome is InjectionOutcome.ANCHOR_NOT_FOUND:
        console.print(f"\n[yellow]Could not find {COMPONENT_ANCHOR} in {layout.relative(file_path)}.[/yellow]")
        console.print(_anchor_help(context, file_path))

    return outcome


def _anchor_help(context: Context, file_path: Path) -> str:
    return f"""
This typically happens because your application was not generated
with LiveView support.

Please make sure LiveView is installed and that {context.web_module}
defines both `live_view/0` and `live_component/0` functions,
and that both functions import {context.web_module}.CoreComponents.
"""


def live_route_instructions(context: Context) -> list[str]:
    schema = context.schema
    alias = f"{schema.alias}Live"
    return [
        f'live "/{schema.plural}", {alias}.Index, :index',
        f'live "/{schema.plural}/new", {alias}.Index, :new',
        f'live "/{schema.plural}/:id/edit", {alias}.Index, :edit',
        "",
        f'live "/{schema.plural}/:id", {alias}.Show, :show',
        f'live "/{schema.plural}/:id/show/edit", {alias}.Show, :edit',
    ]


def shell_instructions(context: Context, layout: ProjectLayout) -> str:
    """The router snippet the user has to add by hand."""
    schema = context.schema
    router = f"{layout.relative(layout.web_root)}/router.ex"

    if schema.web_namespace:
        prefix = f"{context.web_module}.{schema.web_namespace}"
        routes = "\n".join(f"    {line}" if line else "" for line in live_route_instructions(context))
        return (
            f"Add the live routes to your {schema.web_namespace} :browser scope in {router}:\n\n"
            f'scope "/{schema.web_path}", {prefix}, as: :{schema.web_path} do\n'
            "  pipe_through :browser\n"
            "  ...\n\n"
            f"{routes}\n"
            "end"
        )

    routes = "\n".join(live_route_instructions(context))
    return f"Add the live routes to your browser scope in {router}:\n\n{routes}"


UPGRADE_NOTICE = """You must update :phoenix_live_view to v0.18 or later and
:phoenix_live_dashboard to v0.7 or later to use the features
in this generator."""


def print_shell_instructions(context: Context, layout: ProjectLayout, liveview_js: bool = True) -> None:
    console.print(Panel(shell_instructions(context, layout), title="Next"))
    if context.generate:
        console.print(
            "Remember to create and run a migration for the "
            f"[cyan]{context.schema.table}[/cyan] table."
        )
    if not liveview_js:
        console.print(f"\n[yellow]{UPGRADE_NOTICE}[/yellow]")


# ═══════════════════════════════════════════════════════════════════════════
# PUBLIC API
# ═══════════════════════════════════════════════════════════════════════════


def generate_live(
    context: Context,
    layout: ProjectLayout,
    gettext: bool = True,
    templates_dir: Path | None = None,
    confirm: Confirm | None = None,
) -> Context:
    """
    Generate a LiveView resource into the project described by *layout*.

    Args:
        context: Resource built by build_resource
        layout: Detected project layout
        gettext: Wrap user-facing strings in gettext calls
        templates_dir: Optional template overrides
        confirm: Yes/no prompt used for conflicts, defaults to typer.confirm

    Returns:
        The context, for router instructions
    """
    generator = LiveGenerator(layout, templates_dir=templates_dir, confirm=confirm)
    return generator.run(context, gettext=gettext)

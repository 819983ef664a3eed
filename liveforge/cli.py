"""
Liveforge CLI - Command-line interface for resource generation

Usage:
    liveforge live <Context> <Schema> <plural> [name:type ...]
    liveforge new <app>
    liveforge version
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich import print as rprint
from rich.markup import escape
from rich.tree import Tree

from liveforge.bootstrap import generate_new
from liveforge.config import GeneratorConfig
from liveforge.context_gen import ContextGenerator
from liveforge.errors import LiveforgeError
from liveforge.generator import LiveGenerator, print_shell_instructions
from liveforge.project import ProjectLayout
from liveforge.spec import Context, build_resource

app = typer.Typer(
    name="liveforge",
    help="Generate LiveView resources for Phoenix applications",
    add_completion=False,
)


@app.command()
def live(
    ctx: typer.Context,
    context_name: str = typer.Argument(..., metavar="CONTEXT", help="Context module, e.g. Accounts"),
    schema_name: str = typer.Argument(..., metavar="SCHEMA", help="Schema module, e.g. User"),
    plural: str = typer.Argument(..., metavar="PLURAL", help="Plural table name, e.g. users"),
    attrs: Optional[List[str]] = typer.Argument(None, metavar="[ATTR:TYPE]...", help="Fields, e.g. name:string age:integer"),
    context: bool = typer.Option(True, "--context/--no-context", help="Generate the context module"),
    schema: bool = typer.Option(True, "--schema/--no-schema", help="Generate the schema module"),
    web: Optional[str] = typer.Option(None, "--web", help="Web namespace for the LiveViews, e.g. Sales"),
    context_app: Optional[str] = typer.Option(None, "--context-app", help="OTP app that owns the context"),
    gettext: bool = typer.Option(True, "--gettext/--no-gettext", help="Wrap user-facing strings in gettext"),
    root: Path = typer.Option(Path("."), "--root", help="Project root (holds mix.exs)", resolve_path=True),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be generated without writing files"),
) -> None:
    """Generate LiveViews, templates, tests and context for a resource."""
    try:
        config = GeneratorConfig.load(root)
        layout = ProjectLayout.detect(root, context_app or config.context_app)
        resource = build_resource(
            context_name,
            schema_name,
            plural,
            attrs or [],
            layout,
            web=web or config.web_namespace,
            generate_context=context,
            generate_schema=schema,
        )
        use_gettext = _flag_or_config(ctx, "gettext", gettext, config.gettext)
        generator = LiveGenerator(layout, templates_dir=config.templates_dir)

        if dry_run:
            rprint("\n[yellow]Dry run - would generate:[/yellow]\n")
            _show_preview(resource, layout, generator)
            return

        generator.run(resource, gettext=use_gettext)
        print_shell_instructions(resource, layout, liveview_js=layout.liveview_js_available())

    except LiveforgeError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def new(
    name: str = typer.Argument(..., help="Application name, e.g. my_app"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", resolve_path=True),
    gettext: bool = typer.Option(True, "--gettext/--no-gettext", help="Wrap user-facing strings in gettext"),
) -> None:
    """Create a minimal Phoenix web skeleton to generate into."""
    if output is None:
        output = Path.cwd()

    try:
        result = generate_new(name, output, gettext=gettext)
    except LiveforgeError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    rprint(f"[green]✓[/green] Created {len(result.written)} files in {output / name}")
    rprint(f"\nNext: [cyan]cd {output / name} && liveforge live Accounts User users name:string[/cyan]")


@app.command()
def version() -> None:
    """Show version."""
    from liveforge import __version__
    rprint(f"liveforge {__version__}")


def _flag_or_config(ctx: typer.Context, name: str, value: bool, configured: bool) -> bool:
    """Use the CLI flag when it was given explicitly, else the configured default."""
    source = ctx.get_parameter_source(name)
    if source is None or source.name == "DEFAULT":
        return configured
    return value


def _show_preview(resource: Context, layout: ProjectLayout, generator: LiveGenerator) -> None:
    """Show the plan without touching the file system."""
    schema = resource.schema
    tree = Tree(f"[bold]{resource.live_module}[/bold]")

    fields = tree.add("[blue]Fields[/blue]")
    for attr in schema.attrs:
        kind = attr.kind.value
        if attr.inner:
            kind = f"{kind}:{attr.inner.value}"
        fields.add(f"{attr.name}: {kind}")

    files = tree.add("[blue]Files[/blue]")
    context_gen = ContextGenerator(layout, generator.materializer)
    plan = generator.files_to_be_generated(resource) + context_gen.files_to_be_generated(resource)
    for entry in plan:
        mark = " [dim](if absent)[/dim]" if entry.mode.value == "if_absent" else ""
        exists = " [yellow](exists)[/yellow]" if entry.destination.exists() else ""
        files.add(f"{layout.relative(entry.destination)}{mark}{exists}")

    rprint(tree)


def main() -> None:
    app()


if __name__ == "__main__":
    main()

"""Display components for CLI using Rich."""

import os

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from mvnlite.models.project import EffectiveProject

console = Console()


def show_success(title: str, message: str) -> None:
    """Display a success message."""
    console.print()
    console.print(
        Panel(
            f"[bold green]{escape(message)}[/]",
            title=f"[bold]{escape(title)}[/]",
            border_style="green",
        )
    )


def show_error(title: str, message: str) -> None:
    """Display an error message."""
    console.print()
    console.print(
        Panel(
            f"[bold red]{escape(message)}[/]",
            title=f"[bold]{escape(title)}[/]",
            border_style="red",
        )
    )


def show_project(project: EffectiveProject) -> None:
    """Display an effective project as tables.

    Args:
        project: Composed project to display.
    """
    console.print()

    table = Table(title=f"[bold]{escape(str(project.coordinate))}[/]", show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Descriptor", escape(str(project.descriptor_path)))
    table.add_row("Packaging", project.coordinate.packaging)
    table.add_row("Parent", escape(str(project.parent)) if project.parent else "-")
    table.add_row("Compiler options", escape(" ".join(project.compiler_options)) or "-")
    for key, value in project.manifest_entries.items():
        table.add_row(f"Manifest {escape(key)}", escape(value))
    for name, url in project.repositories.items():
        table.add_row(f"Repository {escape(name)}", escape(url))
    console.print(table)

    if project.dependencies:
        deps = Table(title="Dependencies", show_lines=False)
        deps.add_column("Coordinate", style="cyan")
        deps.add_column("Version")
        deps.add_column("Scope", style="dim")
        for dep in project.dependencies:
            deps.add_row(escape(dep.key), escape(dep.version), dep.scope)
        console.print(deps)

    if project.is_aggregator:
        console.print(_module_tree(project))


def _module_tree(project: EffectiveProject) -> Tree:
    tree = Tree(f"[bold]{escape(project.coordinate.key)}[/]")
    for module in project.modules:
        branch = tree.add(f"[cyan]{escape(str(module.coordinate))}[/]")
        if module.is_aggregator:
            branch.add(_module_tree(module))
    return tree


def show_classpath(project: EffectiveProject, classpath: str) -> None:
    """Display one project's classpath, one entry per line."""
    console.print(f"[bold]{escape(str(project.coordinate))}[/]")
    for entry in classpath.split(os.pathsep):
        console.print(f"  {escape(entry)}", soft_wrap=True)

"""Main CLI entry point for mvnlite."""

import sys
from pathlib import Path
from typing import Any

import click

from mvnlite.build.compiler.planner import BuildPlanner
from mvnlite.build.descriptor.composer import ProjectComposer
from mvnlite.build.lifecycle.controller import Lifecycle
from mvnlite.build.lifecycle.loader import load_project
from mvnlite.build.repository.resolver import RepositoryResolver
from mvnlite.cli.display import console, show_classpath, show_error, show_project, show_success
from mvnlite.core.config.settings import Settings, get_settings
from mvnlite.core.exceptions.errors import MvnLiteError
from mvnlite.core.logger.logger import setup_logging
from mvnlite.models.project import EffectiveProject


def parse_repositories(values: tuple[str, ...]) -> dict[str, str]:
    """Parse ``name=url`` pairs given on the command line."""
    repositories: dict[str, str] = {}
    for value in values:
        name, sep, url = value.partition("=")
        if not sep or not name or not url:
            raise click.BadParameter(f"expected name=url, got '{value}'", param_hint="--repository")
        repositories[name] = url
    return repositories


def _fail(title: str, message: str) -> None:
    show_error(title, message)
    sys.exit(1)


def _compose(options: dict[str, Any]) -> EffectiveProject:
    try:
        return ProjectComposer().compose(options["descriptor"], options["repositories"])
    except MvnLiteError as e:
        _fail("Invalid Project", str(e))
        raise


def _leaves(project: EffectiveProject) -> list[EffectiveProject]:
    if not project.is_aggregator:
        return [project]
    return [leaf for module in project.modules for leaf in _leaves(module)]


def run_step(options: dict[str, Any], step: str) -> None:
    """Run a lifecycle step on the selected project.

    Args:
        options: Context options set by the ``main`` group.
        step: One of clean, compile, package, install.
    """
    project = _compose(options)
    lifecycle = Lifecycle.from_settings(project, options["settings"])

    if getattr(lifecycle, step)():
        detail = f"\nArchive: {lifecycle.archive}" if lifecycle.archive else ""
        show_success("Build Succeeded", f"{step} finished for {project.coordinate}{detail}")
        return

    error = lifecycle.last_error
    _fail("Build Failed", f"{step} failed for {project.coordinate}" + (f"\n{error}" if error else ""))


@click.group(invoke_without_command=True)
@click.option(
    "--file",
    "-f",
    "descriptor",
    default="pom.xml",
    type=click.Path(dir_okay=False),
    help="Project descriptor",
)
@click.option(
    "--repository",
    "-r",
    "repositories",
    multiple=True,
    help="Additional repository as name=url (repeatable)",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML settings file",
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def main(
    ctx: click.Context,
    descriptor: str,
    repositories: tuple[str, ...],
    config_path: str | None,
    version: bool,
) -> None:
    """mvnlite - fast in-process builds for Maven projects."""
    if version:
        from mvnlite import __version__

        click.echo(f"mvnlite version {__version__}")
        return

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        return

    if config_path:
        try:
            settings = Settings.load(Path(config_path))
        except MvnLiteError as e:
            _fail("Invalid Configuration", str(e))
            raise
        setup_logging(settings.logging)
    else:
        settings = get_settings()

    ctx.obj = {
        "descriptor": Path(descriptor),
        "repositories": {**settings.repository.remotes, **parse_repositories(repositories)},
        "settings": settings,
    }


@main.command()
@click.pass_obj
def effective(options: dict[str, Any]) -> None:
    """Show the effective (composed) project."""
    show_project(_compose(options))


@main.command()
@click.pass_obj
def classpath(options: dict[str, Any]) -> None:
    """Resolve dependencies and show the compile classpath."""
    settings: Settings = options["settings"]
    resolver = RepositoryResolver(
        local_repository=settings.repository.local_path,
        verify_ssl=settings.repository.verify_ssl,
    )
    try:
        project = load_project(options["descriptor"], resolver, options["repositories"])
    except MvnLiteError as e:
        _fail("Resolution Failed", str(e))
        raise

    planner = BuildPlanner()
    for leaf in _leaves(project):
        show_classpath(leaf, planner.classpath(leaf))
    console.print()


@main.command()
@click.pass_obj
def clean(options: dict[str, Any]) -> None:
    """Delete build output."""
    run_step(options, "clean")


@main.command("compile")
@click.pass_obj
def compile_(options: dict[str, Any]) -> None:
    """Compile stale sources."""
    run_step(options, "compile")


@main.command()
@click.pass_obj
def package(options: dict[str, Any]) -> None:
    """Compile and build the archive."""
    run_step(options, "package")


@main.command()
@click.pass_obj
def install(options: dict[str, Any]) -> None:
    """Compile, package and install into the local repository."""
    run_step(options, "install")


if __name__ == "__main__":
    main()

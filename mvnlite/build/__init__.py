"""Build pipeline - descriptor composition, compilation, packaging and installation."""

from mvnlite.build.archive import ArchiveAssembler, detect_baseline
from mvnlite.build.compiler import BuildPlanner, JavacCompiler
from mvnlite.build.descriptor import DescriptorReader, ProjectComposer
from mvnlite.build.lifecycle import Lifecycle, load_project, resolve_project
from mvnlite.build.repository import LocalRepositoryInstaller, RepositoryResolver

__all__ = [
    # Composition
    "DescriptorReader",
    "ProjectComposer",
    # Compilation
    "BuildPlanner",
    "JavacCompiler",
    # Packaging
    "ArchiveAssembler",
    "detect_baseline",
    # Repositories
    "RepositoryResolver",
    "LocalRepositoryInstaller",
    # Lifecycle
    "Lifecycle",
    "load_project",
    "resolve_project",
]

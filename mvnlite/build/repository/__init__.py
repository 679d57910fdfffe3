"""Artifact repositories: resolution and installation."""

from mvnlite.build.repository.installer import ArtifactInstaller, LocalRepositoryInstaller
from mvnlite.build.repository.layout import artifact_path
from mvnlite.build.repository.resolver import DependencyResolver, RepositoryResolver

__all__ = [
    "artifact_path",
    "DependencyResolver",
    "RepositoryResolver",
    "ArtifactInstaller",
    "LocalRepositoryInstaller",
]

"""Loading fully resolved projects."""

from pathlib import Path

from mvnlite.build.descriptor.composer import ProjectComposer
from mvnlite.build.repository.resolver import DependencyResolver
from mvnlite.core.logger.logger import get_logger
from mvnlite.models.project import EffectiveProject

logger = get_logger(__name__)


def resolve_project(project: EffectiveProject, resolver: DependencyResolver) -> None:
    """Attach resolved artifacts to every leaf project of the tree.

    Aggregators are never resolved themselves; each of their modules is.

    Raises:
        ResolutionError: If any leaf cannot be resolved.
    """
    if project.is_aggregator:
        for module in project.modules:
            resolve_project(module, resolver)
        return

    artifacts = resolver.resolve(project.dependencies, project.repositories)
    project.attach_resolved_artifacts(artifacts)
    logger.debug(f"Resolved {len(artifacts)} artifact(s) for {project.coordinate}")


def load_project(
    descriptor_path: Path | str,
    resolver: DependencyResolver,
    repositories: dict[str, str] | None = None,
    composer: ProjectComposer | None = None,
) -> EffectiveProject:
    """Compose a descriptor tree and resolve its leaf projects.

    Args:
        descriptor_path: Path to the root pom.xml.
        resolver: Dependency resolver, called once per leaf project.
        repositories: Base repositories merged into every project.
        composer: Project composer (default: a new ProjectComposer).

    Returns:
        The composed project with resolved artifacts attached.

    Raises:
        ParseError: If a descriptor cannot be read.
        ResolutionError: If resolution fails.
    """
    composer = composer or ProjectComposer()
    project = composer.compose(descriptor_path, repositories)
    resolve_project(project, resolver)
    return project

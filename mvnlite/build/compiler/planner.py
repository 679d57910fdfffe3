"""Incremental compilation planning."""

import os
from pathlib import Path

from mvnlite.core.exceptions.errors import BuildIOError
from mvnlite.core.logger.logger import get_logger
from mvnlite.models.build import BuildPlan
from mvnlite.models.project import EffectiveProject

logger = get_logger(__name__)

SOURCE_SUFFIX = ".java"
COMPILED_SUFFIX = ".class"


def _modification_time(path: Path) -> int:
    """Return the mtime of ``path`` in nanoseconds, 0 if it does not exist."""
    try:
        return path.stat().st_mtime_ns
    except FileNotFoundError:
        return 0


class BuildPlanner:
    """Works out what needs compiling and with which classpath.

    Nothing is cached: every call looks at the filesystem as it is now.
    """

    def expected_output(self, project: EffectiveProject, source: Path) -> Path:
        """Return the compiled unit expected for ``source``."""
        relative = source.relative_to(project.source_directory)
        return project.output_directory / relative.with_suffix(COMPILED_SUFFIX)

    def stale_sources(self, project: EffectiveProject) -> set[Path]:
        """Find sources modified after their compiled unit.

        A source without a compiled unit is always stale.

        Raises:
            BuildIOError: If the source directory does not exist.
        """
        source_directory = project.source_directory
        if not source_directory.is_dir():
            raise BuildIOError(
                f"Source directory not found: {source_directory}",
                path=source_directory,
            )

        stale: set[Path] = set()
        for source in source_directory.rglob(f"*{SOURCE_SUFFIX}"):
            if not source.is_file():
                continue
            if _modification_time(source) > _modification_time(self.expected_output(project, source)):
                stale.add(source)

        logger.debug(f"{len(stale)} stale source(s) in {source_directory}")
        return stale

    def classpath(self, project: EffectiveProject) -> str:
        """Resolved artifacts in resolver order, then the output directory."""
        entries = [str(Path(artifact).absolute()) for artifact in project.resolved_artifacts or []]
        entries.append(str(project.output_directory.absolute()))
        return os.pathsep.join(entries)

    def plan(self, project: EffectiveProject) -> BuildPlan:
        return BuildPlan(
            stale_sources=self.stale_sources(project),
            classpath=self.classpath(project),
        )

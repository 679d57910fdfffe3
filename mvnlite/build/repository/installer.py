"""Publishing packaged artifacts to the local repository."""

import shutil
from pathlib import Path
from typing import Protocol

from mvnlite.build.repository.layout import artifact_path
from mvnlite.core.config.settings import get_settings
from mvnlite.core.exceptions.errors import InstallError
from mvnlite.core.logger.logger import get_logger
from mvnlite.models.project import Coordinate

logger = get_logger(__name__)


class ArtifactInstaller(Protocol):
    """Publishes an archive together with its descriptor."""

    def install(self, coordinate: Coordinate, archive: Path, descriptor: Path) -> None:
        """Publish ``archive`` and ``descriptor`` under ``coordinate``.

        Raises:
            InstallError: If publishing fails.
        """
        ...


class LocalRepositoryInstaller:
    """Copies artifacts into a Maven-layout local repository."""

    def __init__(self, local_repository: Path | None = None) -> None:
        self.local_repository = local_repository or get_settings().repository.local_path

    def install(self, coordinate: Coordinate, archive: Path, descriptor: Path) -> None:
        """Copy the archive and descriptor into the local repository.

        Raises:
            InstallError: If either file is missing or cannot be copied.
        """
        targets = [
            (archive, self._target(coordinate, archive.suffix.lstrip(".") or "jar")),
            (descriptor, self._target(coordinate, "pom")),
        ]
        for source, target in targets:
            if not source.is_file():
                raise InstallError(
                    f"Cannot install missing file {source}",
                    coordinate=str(coordinate),
                )
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(source, target)
            except OSError as e:
                raise InstallError(
                    f"Failed to install {source} to {target}",
                    coordinate=str(coordinate),
                    details={"error": str(e)},
                ) from e
            logger.info(f"Installed {source.name} to {target}")

    def _target(self, coordinate: Coordinate, extension: str) -> Path:
        relative = artifact_path(
            coordinate.group_id,
            coordinate.artifact_id,
            coordinate.version,
            extension,
        )
        return self.local_repository.joinpath(*relative.parts)

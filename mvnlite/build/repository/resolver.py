"""Dependency resolution against Maven-layout repositories."""

from pathlib import Path
from typing import Protocol

import httpx

from mvnlite.build.descriptor.composer import PROPERTY_REFERENCE
from mvnlite.build.repository.layout import artifact_path
from mvnlite.core.config.settings import get_settings
from mvnlite.core.exceptions.errors import ResolutionError
from mvnlite.core.logger.logger import get_logger
from mvnlite.models.project import Dependency

logger = get_logger(__name__)


class DependencyResolver(Protocol):
    """Turns dependency specs into local artifact files."""

    def resolve(
        self,
        dependencies: list[Dependency],
        repositories: dict[str, str],
    ) -> list[Path]:
        """Resolve every dependency.

        Args:
            dependencies: Deduplicated dependency specs.
            repositories: Repository name to URL map.

        Returns:
            One local file per dependency, in input order.

        Raises:
            ResolutionError: If any dependency cannot be resolved.
        """
        ...


class RepositoryResolver:
    """Resolves dependencies from a local repository, downloading misses.

    Only the declared dependencies are resolved; their own dependencies are
    not followed.
    """

    def __init__(
        self,
        local_repository: Path | None = None,
        client: httpx.Client | None = None,
        verify_ssl: bool | None = None,
        timeout: float = 60.0,
    ) -> None:
        """Initialize the resolver.

        Args:
            local_repository: Local repository root. Defaults to settings.
            client: HTTP client used for downloads. A client is created per
                ``resolve`` call if omitted.
            verify_ssl: Whether to verify SSL certificates.
            timeout: Download timeout in seconds.
        """
        settings = get_settings()
        self.local_repository = local_repository or settings.repository.local_path
        self.verify_ssl = verify_ssl if verify_ssl is not None else settings.repository.verify_ssl
        self.timeout = timeout
        self._client = client

    def local_path(self, dependency: Dependency) -> Path:
        """Return where ``dependency`` lives in the local repository."""
        relative = artifact_path(
            dependency.group_id,
            dependency.artifact_id,
            dependency.version,
            dependency.extension,
            dependency.classifier,
        )
        return self.local_repository.joinpath(*relative.parts)

    def resolve(
        self,
        dependencies: list[Dependency],
        repositories: dict[str, str],
    ) -> list[Path]:
        """Resolve dependencies to local files, in input order.

        Raises:
            ResolutionError: If a dependency has no usable version or is
                found in no repository.
        """
        if self._client is not None:
            return [self._resolve_one(dep, repositories, self._client) for dep in dependencies]

        with httpx.Client(
            verify=self.verify_ssl,
            timeout=self.timeout,
            follow_redirects=True,
        ) as client:
            return [self._resolve_one(dep, repositories, client) for dep in dependencies]

    def _resolve_one(
        self,
        dependency: Dependency,
        repositories: dict[str, str],
        client: httpx.Client,
    ) -> Path:
        if not dependency.version or PROPERTY_REFERENCE.match(dependency.version):
            raise ResolutionError(
                f"Dependency {dependency.key} has no resolvable version",
                dependency=str(dependency),
                details={"version": dependency.version},
            )

        local = self.local_path(dependency)
        if local.is_file():
            logger.debug(f"Resolved {dependency} from local repository")
            return local

        relative = artifact_path(
            dependency.group_id,
            dependency.artifact_id,
            dependency.version,
            dependency.extension,
            dependency.classifier,
        )
        for name, url in repositories.items():
            if self._download(f"{url.rstrip('/')}/{relative}", local, client):
                logger.info(f"Downloaded {dependency} from {name}")
                return local

        raise ResolutionError(
            f"Could not resolve {dependency}",
            dependency=str(dependency),
            details={"repositories": list(repositories)},
        )

    def _download(self, url: str, destination: Path, client: httpx.Client) -> bool:
        """Download ``url`` to ``destination``.

        The body is written to a ``.part`` sibling that is renamed to
        ``destination`` only once complete.

        Returns:
            True if the artifact was downloaded.
        """
        partial = destination.with_name(destination.name + ".part")
        try:
            with client.stream("GET", url) as response:
                if response.status_code != 200:
                    logger.debug(f"{url} returned HTTP {response.status_code}")
                    return False
                destination.parent.mkdir(parents=True, exist_ok=True)
                with open(partial, "wb") as f:
                    for chunk in response.iter_bytes():
                        f.write(chunk)
            partial.replace(destination)
            return True
        except httpx.HTTPError as e:
            logger.debug(f"Download of {url} failed: {e}")
            partial.unlink(missing_ok=True)
            return False
        except OSError as e:
            partial.unlink(missing_ok=True)
            raise ResolutionError(
                f"Failed to store artifact {destination}",
                details={"url": url, "error": str(e)},
            ) from e

"""Archive assembly from the compiled output tree."""

import shutil
import zipfile
from collections.abc import Iterator
from pathlib import Path

from mvnlite.build.archive.manifest import render_manifest
from mvnlite.core.exceptions.errors import BuildIOError
from mvnlite.core.logger.logger import get_logger
from mvnlite.models.build import BaselineManifest
from mvnlite.models.project import EffectiveProject

logger = get_logger(__name__)

ARCHIVE_EXTENSION = "jar"
MANIFEST_DIRECTORY = "META-INF/"
MANIFEST_NAME = "META-INF/MANIFEST.MF"


def walk_tree(root: Path) -> Iterator[Path]:
    """Yield ``root`` and everything below it, depth first, parents first.

    Symbolic links to directories are yielded but not descended into.
    """
    yield root
    if root.is_dir() and not root.is_symlink():
        for child in root.iterdir():
            yield from walk_tree(child)


class ArchiveAssembler:
    """Writes ``<artifact>-<version>.jar`` from a project's output directory."""

    def __init__(self, baseline: BaselineManifest, reproducible: bool = False) -> None:
        """Initialize the assembler.

        Args:
            baseline: Manifest entries every archive starts from.
            reproducible: Sort entries by name instead of traversal order.
        """
        self.baseline = baseline
        self.reproducible = reproducible

    def archive_path(self, project: EffectiveProject) -> Path:
        coordinate = project.coordinate
        return project.target_directory / f"{coordinate.name}-{coordinate.version}.{ARCHIVE_EXTENSION}"

    def manifest_text(self, project: EffectiveProject) -> str:
        return render_manifest(self.baseline, project.manifest_entries)

    def entries(self, project: EffectiveProject) -> list[tuple[str, Path]]:
        """List archive entries for the output directory.

        Directory names end with ``/``. The output directory itself is not
        an entry.

        Raises:
            BuildIOError: If the output directory does not exist.
        """
        output = project.output_directory.absolute()
        if not output.is_dir():
            raise BuildIOError(f"Output directory not found: {output}", path=output)

        entries: list[tuple[str, Path]] = []
        for node in walk_tree(output):
            if node == output:
                continue
            name = node.relative_to(output).as_posix()
            if node.is_dir():
                name += "/"
            entries.append((name, node))

        if self.reproducible:
            entries.sort(key=lambda entry: entry[0])
        return entries

    def assemble(self, project: EffectiveProject) -> Path:
        """Write the archive, replacing any previous one.

        Returns:
            Path of the written archive.

        Raises:
            BuildIOError: If the output tree cannot be read or the archive
                cannot be written.
        """
        destination = self.archive_path(project)
        entries = self.entries(project)
        manifest = self.manifest_text(project)

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(destination, "w", compression=zipfile.ZIP_DEFLATED) as archive:
                archive.writestr(MANIFEST_DIRECTORY, b"")
                archive.writestr(MANIFEST_NAME, manifest.encode("utf-8"))
                for name, node in entries:
                    if name in (MANIFEST_DIRECTORY, MANIFEST_NAME):
                        logger.debug(f"Skipping {name} from output tree; manifest is generated")
                        continue
                    self._write_entry(archive, name, node)
        except OSError as e:
            raise BuildIOError(
                f"Failed to write archive {destination}",
                path=destination,
                details={"error": str(e)},
            ) from e

        logger.info(f"Built {destination} ({len(entries)} entries)")
        return destination

    def _write_entry(self, archive: zipfile.ZipFile, name: str, node: Path) -> None:
        info = zipfile.ZipInfo.from_file(node, name, strict_timestamps=False)
        if info.is_dir():
            archive.writestr(info, b"")
            return

        info.compress_type = zipfile.ZIP_DEFLATED
        with open(node, "rb") as source, archive.open(info, "w") as target:
            shutil.copyfileobj(source, target)

"""Archive and manifest assembly."""

from mvnlite.build.archive.assembler import (
    ARCHIVE_EXTENSION,
    MANIFEST_NAME,
    ArchiveAssembler,
    walk_tree,
)
from mvnlite.build.archive.manifest import detect_baseline, render_manifest

__all__ = [
    "ARCHIVE_EXTENSION",
    "MANIFEST_NAME",
    "ArchiveAssembler",
    "walk_tree",
    "detect_baseline",
    "render_manifest",
]

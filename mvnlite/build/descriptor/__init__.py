"""Descriptor reading and project composition."""

from mvnlite.build.descriptor.composer import (
    ProjectComposer,
    distinct,
    expand_dependencies,
    expand_property,
)
from mvnlite.build.descriptor.reader import POM_FILE, DescriptorReader

__all__ = [
    "POM_FILE",
    "DescriptorReader",
    "ProjectComposer",
    "expand_property",
    "expand_dependencies",
    "distinct",
]

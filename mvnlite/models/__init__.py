"""Data models module."""

from mvnlite.models.build import (
    BaselineManifest,
    BuildPlan,
    CompileResult,
    LifecycleState,
    ManifestEntry,
)
from mvnlite.models.project import (
    Coordinate,
    Dependency,
    EffectiveProject,
    RawModel,
)

__all__ = [
    "Coordinate",
    "Dependency",
    "RawModel",
    "EffectiveProject",
    "BuildPlan",
    "ManifestEntry",
    "BaselineManifest",
    "CompileResult",
    "LifecycleState",
]

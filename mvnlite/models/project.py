"""Project descriptor data models."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

SOURCE_LANGUAGE = "java"


class Coordinate(BaseModel):
    """Identifies a publishable artifact."""

    model_config = ConfigDict(frozen=True)

    group_id: str = Field(description="Namespace (groupId)")
    artifact_id: str = Field(description="Artifact name (artifactId)")
    version: str = Field(description="Version string")
    packaging: str = Field(default="jar", description="Packaging type")

    @property
    def key(self) -> str:
        """Return the namespaced identifier, e.g. ``org.example:app``."""
        return f"{self.group_id}:{self.artifact_id}"

    @property
    def name(self) -> str:
        """Return the artifact name (the part after the namespace)."""
        return self.artifact_id

    def __str__(self) -> str:
        return f"{self.key}:{self.version}"


class Dependency(BaseModel):
    """A dependency spec; identity is the full tuple."""

    model_config = ConfigDict(frozen=True)

    group_id: str
    artifact_id: str
    version: str
    scope: str = "compile"
    extension: str = "jar"
    classifier: str | None = None

    @property
    def key(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    def with_version(self, version: str) -> "Dependency":
        """Return a copy of this dependency pinned to ``version``."""
        return self.model_copy(update={"version": version})

    def __str__(self) -> str:
        parts = [self.group_id, self.artifact_id, self.extension]
        if self.classifier:
            parts.append(self.classifier)
        parts.append(self.version)
        return ":".join(parts)


class RawModel(BaseModel):
    """Fields read from a single descriptor file, before composition.

    Versions are kept exactly as written (``${...}`` references unexpanded).
    """

    descriptor_path: Path
    coordinate: Coordinate
    parent: Coordinate | None = None
    modules: list[str] = Field(default_factory=list)
    properties: dict[str, str] = Field(default_factory=dict)
    dependencies: list[Dependency] = Field(default_factory=list)
    repositories: dict[str, str] = Field(default_factory=dict)
    compiler_options: list[str] = Field(default_factory=list)
    manifest_entries: dict[str, str] = Field(default_factory=dict)


class EffectiveProject(BaseModel):
    """The composed configuration of a project.

    Built once by the composer; afterwards only ``resolved_artifacts`` is
    ever set, and only on leaf (non-aggregator) projects.
    """

    coordinate: Coordinate
    descriptor_path: Path
    parent: Coordinate | None = None
    modules: list["EffectiveProject"] = Field(default_factory=list)
    properties: dict[str, str] = Field(default_factory=dict)
    dependencies: list[Dependency] = Field(default_factory=list)
    declared_dependencies: list[Dependency] = Field(
        default_factory=list,
        description="Own and inherited dependencies with versions as written",
    )
    repositories: dict[str, str] = Field(default_factory=dict)
    compiler_options: list[str] = Field(default_factory=list)
    manifest_entries: dict[str, str] = Field(default_factory=dict)
    resolved_artifacts: list[Path] | None = None

    @property
    def is_aggregator(self) -> bool:
        return bool(self.modules)

    @property
    def module_dependencies(self) -> list[list[Dependency]]:
        """Per-module dependency lists, in module order."""
        return [module.dependencies for module in self.modules]

    @property
    def project_dir(self) -> Path:
        return self.descriptor_path.parent

    @property
    def source_directory(self) -> Path:
        return self.project_dir / "src" / "main" / SOURCE_LANGUAGE

    @property
    def resources_directory(self) -> Path:
        return self.project_dir / "src" / "main" / "resources"

    @property
    def target_directory(self) -> Path:
        return self.project_dir / "target"

    @property
    def output_directory(self) -> Path:
        return self.target_directory / "classes"

    def attach_resolved_artifacts(self, artifacts: list[Path]) -> None:
        """Record the resolver's output for this project.

        Args:
            artifacts: Resolved artifact paths, in dependency order.

        Raises:
            ValueError: If this is an aggregator project.
        """
        if self.is_aggregator:
            raise ValueError(f"Aggregator project {self.coordinate} cannot carry resolved artifacts")
        self.resolved_artifacts = list(artifacts)


EffectiveProject.model_rebuild()

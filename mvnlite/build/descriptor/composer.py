"""Composition of effective projects from descriptor hierarchies.

A descriptor is composed in exactly one of three modes:

- aggregator: it lists modules; each module is composed and collected.
- child: it references a parent; the parent's configuration is merged in.
- plain: neither; only its own properties apply.

Parent and module links are followed in one direction per call. A module
never loads a parent from disk; it receives its aggregator as an explicit
parent when it declares one. A parent loaded from disk is composed without
following its modules, so the same descriptor is never expanded in both
directions at once.
"""

import re
from collections.abc import Iterable
from pathlib import Path

from mvnlite.build.descriptor.reader import POM_FILE, DescriptorReader
from mvnlite.core.exceptions.errors import ParseError
from mvnlite.core.logger.logger import get_logger
from mvnlite.models.project import Dependency, EffectiveProject, RawModel

logger = get_logger(__name__)

MAX_DESCRIPTOR_DEPTH = 32

PROPERTY_REFERENCE = re.compile(r"^\$\{(.*)\}$")


def expand_property(value: str, properties: dict[str, str]) -> str:
    """Expand a value of the exact form ``${name}``.

    Partial references (``1.${minor}``) and nested references are not
    expanded. An unknown name leaves the value unchanged.

    Args:
        value: Raw value, usually a dependency version.
        properties: Property map to look the name up in.

    Returns:
        The property value, or ``value`` unchanged.
    """
    match = PROPERTY_REFERENCE.match(value)
    if match is None:
        return value
    return properties.get(match.group(1), value)


def expand_dependencies(
    dependencies: Iterable[Dependency],
    properties: dict[str, str],
) -> list[Dependency]:
    """Expand the version of every dependency against ``properties``."""
    return [dep.with_version(expand_property(dep.version, properties)) for dep in dependencies]


def distinct(dependencies: Iterable[Dependency]) -> list[Dependency]:
    """Drop repeated dependencies, keeping the first occurrence."""
    seen: set[Dependency] = set()
    unique: list[Dependency] = []
    for dep in dependencies:
        if dep not in seen:
            seen.add(dep)
            unique.append(dep)
    return unique


class ProjectComposer:
    """Builds EffectiveProjects from pom.xml trees."""

    def __init__(self, reader: DescriptorReader | None = None) -> None:
        """Initialize the composer.

        Args:
            reader: Descriptor reader. A default reader is created if omitted.
        """
        self.reader = reader or DescriptorReader()

    def compose(
        self,
        descriptor_path: Path | str,
        base_repositories: dict[str, str] | None = None,
        parent: EffectiveProject | None = None,
    ) -> EffectiveProject:
        """Compose the effective project for a descriptor.

        Args:
            descriptor_path: Path to pom.xml.
            base_repositories: Repositories added to every composed project;
                they take precedence over repositories of the same name
                declared in descriptors.
            parent: Explicit parent for a child descriptor. When omitted the
                parent is read from ``<dir>/../pom.xml``.

        Returns:
            The composed EffectiveProject.

        Raises:
            ParseError: If a descriptor is missing, malformed, or the parent
                chain loops.
        """
        return self._compose(
            Path(descriptor_path).resolve(),
            dict(base_repositories or {}),
            parent=parent,
            follow_modules=True,
            chain=(),
        )

    def _compose(
        self,
        path: Path,
        base_repositories: dict[str, str],
        parent: EffectiveProject | None,
        follow_modules: bool,
        chain: tuple[Path, ...],
        inherited_properties: dict[str, str] | None = None,
        raw: RawModel | None = None,
        load_parent: bool = True,
    ) -> EffectiveProject:
        if path in chain:
            raise ParseError(
                f"Descriptor hierarchy loops back to {path}",
                descriptor=path,
                details={"chain": [str(p) for p in chain]},
            )
        if len(chain) >= MAX_DESCRIPTOR_DEPTH:
            raise ParseError(
                f"Descriptor hierarchy deeper than {MAX_DESCRIPTOR_DEPTH} levels at {path}",
                descriptor=path,
            )
        chain = (*chain, path)

        if raw is None:
            raw = self.reader.read(path)
        repositories = {**raw.repositories, **base_repositories}

        if raw.modules and follow_modules:
            return self._compose_aggregator(raw, repositories, base_repositories, chain)

        if raw.parent is not None:
            if parent is None and load_parent:
                parent = self._load_parent(raw, base_repositories, chain)
            if parent is not None:
                return self._compose_child(raw, repositories, parent)

        return self._compose_plain(raw, repositories, inherited_properties or {})

    def _load_parent(
        self,
        raw: RawModel,
        base_repositories: dict[str, str],
        chain: tuple[Path, ...],
    ) -> EffectiveProject | None:
        """Compose the parent found at the default sibling path.

        Returns None when no matching parent descriptor exists there.
        """
        parent_path = (raw.descriptor_path.parent / ".." / POM_FILE).resolve()
        if not parent_path.is_file():
            logger.warning(
                f"Parent {raw.parent} of {raw.coordinate} not found at {parent_path}; "
                f"composing without inheritance"
            )
            return None

        parent = self._compose(
            parent_path,
            base_repositories,
            parent=None,
            follow_modules=False,
            chain=chain,
        )
        if raw.parent is not None and parent.coordinate.key != raw.parent.key:
            logger.warning(
                f"{parent_path} declares {parent.coordinate.key}, "
                f"expected parent {raw.parent.key}; composing without inheritance"
            )
            return None
        return parent

    def _compose_aggregator(
        self,
        raw: RawModel,
        repositories: dict[str, str],
        base_repositories: dict[str, str],
        chain: tuple[Path, ...],
    ) -> EffectiveProject:
        # The aggregator as seen by its modules: own configuration only.
        own = self._compose_plain(raw, repositories, {})

        modules: list[EffectiveProject] = []
        for name in raw.modules:
            module_path = (raw.descriptor_path.parent / name / POM_FILE).resolve()
            logger.debug(f"Composing module {name} of {raw.coordinate}")
            modules.append(
                self._compose_module(module_path, own, base_repositories, chain)
            )

        dependencies = distinct(dep for module in modules for dep in module.dependencies)
        return own.model_copy(update={"modules": modules, "dependencies": dependencies})

    def _compose_module(
        self,
        module_path: Path,
        aggregator: EffectiveProject,
        base_repositories: dict[str, str],
        chain: tuple[Path, ...],
    ) -> EffectiveProject:
        """Compose one module of an aggregator.

        A module whose declared parent is the aggregator inherits from it
        directly. Any other module is never linked to a parent on disk, since
        its default parent path is the aggregator itself; it sees the
        aggregator's properties as defaults for its own version expansion.
        """
        module_raw = self.reader.read(module_path)
        explicit_parent = None
        if module_raw.parent is not None:
            if module_raw.parent.key == aggregator.coordinate.key:
                explicit_parent = aggregator
            else:
                logger.debug(
                    f"Module {module_raw.coordinate} declares external parent "
                    f"{module_raw.parent}; composing without inheritance"
                )
        return self._compose(
            module_path,
            base_repositories,
            parent=explicit_parent,
            follow_modules=True,
            chain=chain,
            inherited_properties=aggregator.properties,
            raw=module_raw,
            load_parent=False,
        )

    def _compose_child(
        self,
        raw: RawModel,
        repositories: dict[str, str],
        parent: EffectiveProject,
    ) -> EffectiveProject:
        """Merge ``raw`` over ``parent``.

        Versions of both the child's and the parent's declared dependencies
        are expanded against the merged properties, so a child property
        overrides the version of a dependency declared in the parent.
        """
        properties = {**parent.properties, **raw.properties}
        inherited = parent.declared_dependencies or parent.dependencies
        declared = distinct(raw.dependencies + inherited)
        return EffectiveProject(
            coordinate=raw.coordinate,
            descriptor_path=raw.descriptor_path,
            parent=raw.parent,
            properties=properties,
            dependencies=distinct(expand_dependencies(declared, properties)),
            declared_dependencies=declared,
            repositories={**parent.repositories, **repositories},
            compiler_options=list(raw.compiler_options or parent.compiler_options),
            manifest_entries={**parent.manifest_entries, **raw.manifest_entries},
        )

    def _compose_plain(
        self,
        raw: RawModel,
        repositories: dict[str, str],
        inherited_properties: dict[str, str],
    ) -> EffectiveProject:
        properties = {**inherited_properties, **raw.properties}
        return EffectiveProject(
            coordinate=raw.coordinate,
            descriptor_path=raw.descriptor_path,
            parent=raw.parent,
            properties=properties,
            dependencies=distinct(expand_dependencies(raw.dependencies, properties)),
            declared_dependencies=list(raw.dependencies),
            repositories=repositories,
            compiler_options=list(raw.compiler_options),
            manifest_entries=dict(raw.manifest_entries),
        )

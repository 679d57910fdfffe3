"""Reader for pom.xml descriptors."""

import re
import xml.etree.ElementTree as ET
from pathlib import Path

from mvnlite.core.exceptions.errors import ParseError
from mvnlite.core.logger.logger import get_logger
from mvnlite.models.project import Coordinate, Dependency, RawModel

POM_FILE = "pom.xml"
DEFAULT_PLUGIN_GROUP = "org.apache.maven.plugins"
JAR_PLUGIN = "maven-jar-plugin"
COMPILER_PLUGIN = "maven-compiler-plugin"
DEFAULT_LANGUAGE_LEVEL = "1.8"


def _local_name(elem: ET.Element) -> str:
    """Return the tag of ``elem`` without its namespace."""
    return elem.tag.split("}")[-1] if "}" in elem.tag else elem.tag


def _child(elem: ET.Element | None, name: str) -> ET.Element | None:
    if elem is None:
        return None
    for child in elem:
        if _local_name(child) == name:
            return child
    return None


def _children(elem: ET.Element | None, name: str) -> list[ET.Element]:
    if elem is None:
        return []
    return [child for child in elem if _local_name(child) == name]


def _elements(elem: ET.Element | None) -> list[ET.Element]:
    return list(elem) if elem is not None else []


def _text(elem: ET.Element | None, name: str) -> str | None:
    child = _child(elem, name)
    if child is None or child.text is None:
        return None
    return child.text.strip() or None


class DescriptorReader:
    """Reads a single pom.xml into a RawModel.

    Only the sections the build consumes are read: coordinate, parent,
    modules, properties, dependencies, repositories and the jar/compiler
    plugin configuration. Everything else in the document is ignored.
    """

    def __init__(self) -> None:
        """Initialize the descriptor reader."""
        self.logger = get_logger(__name__)

    def read(self, path: Path | str) -> RawModel:
        """Parse a descriptor file.

        Args:
            path: Path to pom.xml.

        Returns:
            RawModel with unexpanded dependency versions.

        Raises:
            ParseError: If the file is missing or is not a valid descriptor.
        """
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise ParseError(f"Descriptor not found: {path}", descriptor=path) from e
        except OSError as e:
            raise ParseError(
                f"Failed to read descriptor: {path}",
                descriptor=path,
                details={"error": str(e)},
            ) from e

        # Remove XML declaration and comments for parsing
        content = re.sub(r"<\?xml[^>]*\?>", "", content)
        content = re.sub(r"<!--.*?-->", "", content, flags=re.DOTALL)
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise ParseError(
                f"Malformed descriptor: {path}",
                descriptor=path,
                details={"error": str(e)},
            ) from e

        if _local_name(root) != "project":
            raise ParseError(
                f"Descriptor root element must be <project>: {path}",
                descriptor=path,
                details={"root": _local_name(root)},
            )

        parent = self._extract_parent(root, path)
        properties = self._extract_properties(root)
        model = RawModel(
            descriptor_path=path,
            coordinate=self._extract_coordinate(root, parent, path),
            parent=parent,
            modules=self._extract_modules(root),
            properties=properties,
            dependencies=self._extract_dependencies(root),
            repositories=self._extract_repositories(root),
            compiler_options=self._extract_compiler_options(root, properties),
            manifest_entries=self._extract_manifest_entries(root),
        )
        self.logger.debug(
            f"Read {path}: {model.coordinate}, {len(model.dependencies)} dependencies, "
            f"{len(model.modules)} modules"
        )
        return model

    def _extract_parent(self, root: ET.Element, path: Path) -> Coordinate | None:
        parent = _child(root, "parent")
        if parent is None:
            return None

        group_id = _text(parent, "groupId")
        artifact_id = _text(parent, "artifactId")
        version = _text(parent, "version")
        if not (group_id and artifact_id and version):
            raise ParseError(
                f"Incomplete <parent> coordinate in {path}",
                descriptor=path,
                details={"groupId": group_id, "artifactId": artifact_id, "version": version},
            )
        return Coordinate(group_id=group_id, artifact_id=artifact_id, version=version, packaging="pom")

    def _extract_coordinate(
        self,
        root: ET.Element,
        parent: Coordinate | None,
        path: Path,
    ) -> Coordinate:
        """Extract the project coordinate, inheriting groupId/version from the parent."""
        group_id = _text(root, "groupId") or (parent.group_id if parent else None)
        artifact_id = _text(root, "artifactId")
        version = _text(root, "version") or (parent.version if parent else None)

        missing = [
            name
            for name, value in (("groupId", group_id), ("artifactId", artifact_id), ("version", version))
            if not value
        ]
        if missing:
            raise ParseError(
                f"Descriptor {path} is missing {', '.join(missing)}",
                descriptor=path,
                details={"missing": missing},
            )

        return Coordinate(
            group_id=group_id,
            artifact_id=artifact_id,
            version=version,
            packaging=_text(root, "packaging") or "jar",
        )

    def _extract_modules(self, root: ET.Element) -> list[str]:
        modules = _child(root, "modules")
        return [m.text.strip() for m in _children(modules, "module") if m.text and m.text.strip()]

    def _extract_properties(self, root: ET.Element) -> dict[str, str]:
        properties: dict[str, str] = {}
        for child in _elements(_child(root, "properties")):
            properties[_local_name(child)] = (child.text or "").strip()
        return properties

    def _extract_dependencies(self, root: ET.Element) -> list[Dependency]:
        """Extract direct dependencies.

        A dependency without a version takes the one declared for the same
        groupId:artifactId in this descriptor's dependencyManagement, if any.
        """
        managed: dict[str, str] = {}
        management = _child(_child(root, "dependencyManagement"), "dependencies")
        for elem in _children(management, "dependency"):
            group_id = _text(elem, "groupId")
            artifact_id = _text(elem, "artifactId")
            version = _text(elem, "version")
            if group_id and artifact_id and version:
                managed[f"{group_id}:{artifact_id}"] = version

        dependencies: list[Dependency] = []
        for elem in _children(_child(root, "dependencies"), "dependency"):
            group_id = _text(elem, "groupId")
            artifact_id = _text(elem, "artifactId")
            if not group_id or not artifact_id:
                self.logger.warning("Skipping dependency without groupId/artifactId")
                continue

            version = _text(elem, "version") or managed.get(f"{group_id}:{artifact_id}", "")
            dependencies.append(
                Dependency(
                    group_id=group_id,
                    artifact_id=artifact_id,
                    version=version,
                    scope=_text(elem, "scope") or "compile",
                    extension=_text(elem, "type") or "jar",
                    classifier=_text(elem, "classifier"),
                )
            )
        return dependencies

    def _extract_repositories(self, root: ET.Element) -> dict[str, str]:
        repositories: dict[str, str] = {}
        for repo in _children(_child(root, "repositories"), "repository"):
            url = _text(repo, "url")
            name = _text(repo, "name") or _text(repo, "id")
            if name and url:
                repositories[name] = url
        return repositories

    def _find_plugin(self, root: ET.Element, artifact_id: str) -> ET.Element | None:
        """Find a plugin in build/plugins, then build/pluginManagement/plugins."""
        build = _child(root, "build")
        candidates = _children(_child(build, "plugins"), "plugin") + _children(
            _child(_child(build, "pluginManagement"), "plugins"), "plugin"
        )
        for plugin in candidates:
            group_id = _text(plugin, "groupId") or DEFAULT_PLUGIN_GROUP
            if group_id == DEFAULT_PLUGIN_GROUP and _text(plugin, "artifactId") == artifact_id:
                return plugin
        return None

    def _extract_compiler_options(
        self,
        root: ET.Element,
        properties: dict[str, str],
    ) -> list[str]:
        """Build javac options from the maven-compiler-plugin configuration.

        Returns an empty list when the descriptor declares no compiler plugin.
        """
        plugin = self._find_plugin(root, COMPILER_PLUGIN)
        if plugin is None:
            return []

        config = _child(plugin, "configuration")
        source = (
            _text(config, "source")
            or properties.get("maven.compiler.source")
            or DEFAULT_LANGUAGE_LEVEL
        )
        target = (
            _text(config, "target")
            or properties.get("maven.compiler.target")
            or DEFAULT_LANGUAGE_LEVEL
        )
        show_warnings = (_text(config, "showWarnings") or "false").lower() == "true"

        options = ["-source", source, "-target", target]
        options.append("-Xlint:all" if show_warnings else "-Xlint:none")
        for arg in _children(_child(config, "compilerArgs"), "arg"):
            if arg.text and arg.text.strip():
                options.append(arg.text.strip())
        return options

    def _extract_manifest_entries(self, root: ET.Element) -> dict[str, str]:
        """Read maven-jar-plugin configuration/archive/manifestEntries."""
        plugin = self._find_plugin(root, JAR_PLUGIN)
        config = _child(plugin, "configuration")
        archive = _child(config, "archive")
        entries: dict[str, str] = {}
        for entry in _elements(_child(archive, "manifestEntries")):
            entries[_local_name(entry)] = (entry.text or "").strip()
        return entries

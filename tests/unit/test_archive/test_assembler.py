"""Unit tests for archive assembly."""

import os
import zipfile
from pathlib import Path

import pytest

from mvnlite.build.archive.assembler import MANIFEST_NAME, ArchiveAssembler, walk_tree
from mvnlite.core.exceptions.errors import BuildIOError
from mvnlite.models.build import BaselineManifest
from mvnlite.models.project import EffectiveProject


@pytest.fixture
def output_tree(leaf_project: EffectiveProject) -> Path:
    """Populate the output directory with classes and a resource."""
    output = leaf_project.output_directory
    (output / "org" / "example").mkdir(parents=True)
    (output / "org" / "example" / "Main.class").write_bytes(b"\xca\xfe\xba\xbe")
    (output / "org" / "example" / "Util.class").write_bytes(b"\xca\xfe\xba\xbe\x00")
    (output / "app.properties").write_text("name=app\n")
    (output / "empty").mkdir()
    return output


class TestWalkTree:
    """Tests for the output tree traversal."""

    def test_parents_before_children(self, output_tree: Path) -> None:
        """Test every directory is yielded before its contents."""
        nodes = list(walk_tree(output_tree))

        assert nodes[0] == output_tree
        for index, node in enumerate(nodes[1:], start=1):
            assert nodes.index(node.parent) < index

    def test_symlinked_directory_not_descended(self, output_tree: Path, temp_dir: Path) -> None:
        """Test links to directories are listed but not followed."""
        outside = temp_dir / "outside"
        outside.mkdir()
        (outside / "Secret.class").write_bytes(b"x")
        (output_tree / "link").symlink_to(outside, target_is_directory=True)

        nodes = list(walk_tree(output_tree))

        assert output_tree / "link" in nodes
        assert output_tree / "link" / "Secret.class" not in nodes


class TestArchiveAssembler:
    """Tests for ArchiveAssembler."""

    @pytest.fixture
    def assembler(self, baseline: BaselineManifest) -> ArchiveAssembler:
        """Create assembler instance."""
        return ArchiveAssembler(baseline)

    def test_archive_name(self, assembler: ArchiveAssembler, leaf_project: EffectiveProject) -> None:
        """Test the archive is named after the artifact and version."""
        assert assembler.archive_path(leaf_project) == leaf_project.target_directory / "app-1.0.0.jar"

    def test_entries_match_output_tree(
        self, assembler: ArchiveAssembler, leaf_project: EffectiveProject, output_tree: Path
    ) -> None:
        """Test entries cover exactly the output tree, relative to its root."""
        expected = set()
        for dirpath, dirnames, filenames in os.walk(output_tree):
            relative = Path(dirpath).relative_to(output_tree)
            for name in dirnames:
                expected.add((relative / name).as_posix() + "/")
            for name in filenames:
                expected.add((relative / name).as_posix())

        names = [name for name, _ in assembler.entries(leaf_project)]

        assert len(names) == len(set(names))
        assert set(names) == expected
        assert "org/example/Main.class" in names
        assert "empty/" in names

    def test_reproducible_entries_sorted(
        self, baseline: BaselineManifest, leaf_project: EffectiveProject, output_tree: Path
    ) -> None:
        """Test reproducible mode orders entries by name."""
        names = [name for name, _ in ArchiveAssembler(baseline, reproducible=True).entries(leaf_project)]

        assert names == sorted(names)

    def test_assemble(
        self, assembler: ArchiveAssembler, leaf_project: EffectiveProject, output_tree: Path
    ) -> None:
        """Test the written archive holds the manifest and every entry."""
        archive_path = assembler.assemble(leaf_project)

        with zipfile.ZipFile(archive_path) as archive:
            names = archive.namelist()
            manifest = archive.read(MANIFEST_NAME).decode("utf-8")
            main_class = archive.read("org/example/Main.class")
            empty = archive.getinfo("empty/")

        assert names[:2] == ["META-INF/", MANIFEST_NAME]
        assert set(names[2:]) == {name for name, _ in assembler.entries(leaf_project)}
        assert manifest.startswith("Manifest-Version: 1.0\n")
        assert "Created-By: mvnlite test\n" in manifest
        assert main_class == b"\xca\xfe\xba\xbe"
        assert empty.is_dir()
        assert empty.file_size == 0

    def test_manifest_includes_project_entries(
        self, assembler: ArchiveAssembler, leaf_project: EffectiveProject, output_tree: Path
    ) -> None:
        """Test declared manifest entries reach the archive."""
        project = leaf_project.model_copy(update={"manifest_entries": {"Foo": "Bar"}})

        with zipfile.ZipFile(assembler.assemble(project)) as archive:
            manifest = archive.read(MANIFEST_NAME).decode("utf-8")

        assert "Foo: Bar\n" in manifest
        assert "Built-By: tester\n" in manifest

    def test_assemble_overwrites(
        self, assembler: ArchiveAssembler, leaf_project: EffectiveProject, output_tree: Path
    ) -> None:
        """Test a second assembly replaces the previous archive."""
        assembler.assemble(leaf_project)
        (output_tree / "app.properties").unlink()

        with zipfile.ZipFile(assembler.assemble(leaf_project)) as archive:
            names = archive.namelist()

        assert "app.properties" not in names

    def test_output_manifest_not_duplicated(
        self, assembler: ArchiveAssembler, leaf_project: EffectiveProject, output_tree: Path
    ) -> None:
        """Test a manifest in the output tree does not replace the generated one."""
        (output_tree / "META-INF").mkdir()
        (output_tree / "META-INF" / "MANIFEST.MF").write_text("Manifest-Version: 9\n")
        (output_tree / "META-INF" / "services").write_text("x\n")

        with zipfile.ZipFile(assembler.assemble(leaf_project)) as archive:
            names = archive.namelist()
            manifest = archive.read(MANIFEST_NAME).decode("utf-8")

        assert names.count(MANIFEST_NAME) == 1
        assert names.count("META-INF/") == 1
        assert "META-INF/services" in names
        assert manifest.startswith("Manifest-Version: 1.0\n")

    def test_old_timestamps_accepted(
        self, assembler: ArchiveAssembler, leaf_project: EffectiveProject, output_tree: Path
    ) -> None:
        """Test files dated before 1980 can still be archived."""
        os.utime(output_tree / "app.properties", (1_000_000, 1_000_000))

        with zipfile.ZipFile(assembler.assemble(leaf_project)) as archive:
            assert archive.read("app.properties") == b"name=app\n"

    def test_missing_output_directory(
        self, assembler: ArchiveAssembler, leaf_project: EffectiveProject
    ) -> None:
        """Test packaging without compiled output raises BuildIOError."""
        with pytest.raises(BuildIOError):
            assembler.assemble(leaf_project)

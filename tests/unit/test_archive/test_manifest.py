"""Unit tests for manifest construction."""

from unittest.mock import MagicMock

from mvnlite.build.archive.manifest import detect_baseline, render_manifest
from mvnlite.core.config.settings import ArchiveSettings, CompilerSettings, Settings
from mvnlite.models.build import BaselineManifest, ManifestEntry


class TestManifestEntry:
    """Tests for single entry rendering."""

    def test_short_entry(self) -> None:
        """Test a short entry renders on one line."""
        assert ManifestEntry(key="Foo", value="Bar").render() == "Foo: Bar"

    def test_140_bytes_wraps_into_two_lines(self) -> None:
        """Test a 140-byte entry becomes two 70-byte lines."""
        entry = ManifestEntry(key="K", value="v" * 137)

        lines = entry.render().split("\n")

        assert len(lines) == 2
        assert lines[0] == "K: " + "v" * 67
        assert lines[1] == " " + "v" * 70
        assert len(lines[0]) == 70

    def test_long_entry_continuations(self) -> None:
        """Test every continuation line starts with one space."""
        rendered = ManifestEntry(key="Class-Path", value="lib/a.jar " * 30).render()

        lines = rendered.split("\n")
        assert len(lines) > 2
        assert all(line.startswith(" ") for line in lines[1:])
        assert len(lines[0]) == 70
        assert all(len(line[1:]) <= 70 for line in lines[1:])
        assert lines[0] + "".join(line[1:] for line in lines[1:]) == "Class-Path: " + "lib/a.jar " * 30

    def test_multibyte_characters_not_split(self) -> None:
        """Test wrapping counts bytes and keeps characters whole."""
        entry = ManifestEntry(key="K", value="é" * 40)

        first, second = entry.render().split("\n")

        assert len(first.encode("utf-8")) <= 70
        assert first == "K: " + "é" * 33
        assert second == " " + "é" * 7


class TestRenderManifest:
    """Tests for full manifest text."""

    def test_baseline_only(self, baseline: BaselineManifest) -> None:
        """Test the header and baseline entries."""
        text = render_manifest(baseline, {})

        assert text == (
            "Manifest-Version: 1.0\n"
            "Created-By: mvnlite test\n"
            "Built-By: tester\n"
            "Build-Jdk: 17.0.9\n"
        )

    def test_declared_entries_override_baseline(self, baseline: BaselineManifest) -> None:
        """Test declared entries win on key collision and extend the set."""
        text = render_manifest(baseline, {"Built-By": "ci", "Foo": "Bar"})

        lines = text.splitlines()
        assert lines[0] == "Manifest-Version: 1.0"
        assert "Built-By: ci" in lines
        assert "Built-By: tester" not in lines
        assert lines[-1] == "Foo: Bar"

    def test_manifest_version_not_overridable(self, baseline: BaselineManifest) -> None:
        """Test the version header cannot be redeclared."""
        text = render_manifest(baseline, {"Manifest-Version": "2.0"})

        assert text.count("Manifest-Version") == 1
        assert text.startswith("Manifest-Version: 1.0\n")


class TestDetectBaseline:
    """Tests for baseline detection."""

    def test_configured_build_jdk(self) -> None:
        """Test a configured Build-Jdk skips compiler detection."""
        settings = Settings(
            compiler=CompilerSettings(build_jdk="21.0.1"),
            archive=ArchiveSettings(created_by="custom"),
        )
        compiler = MagicMock()

        baseline = detect_baseline(settings, compiler)

        assert baseline.build_jdk == "21.0.1"
        assert baseline.created_by == "custom"
        assert baseline.built_by
        compiler.version.assert_not_called()

    def test_build_jdk_from_compiler(self) -> None:
        """Test Build-Jdk comes from the compiler version."""
        compiler = MagicMock()
        compiler.version.return_value = "17.0.9"

        baseline = detect_baseline(Settings(compiler=CompilerSettings(build_jdk=None)), compiler)

        assert baseline.build_jdk == "17.0.9"

    def test_build_jdk_unknown(self) -> None:
        """Test Build-Jdk falls back to unknown."""
        compiler = MagicMock()
        compiler.version.return_value = None

        baseline = detect_baseline(Settings(compiler=CompilerSettings(build_jdk=None)), compiler)

        assert baseline.build_jdk == "unknown"

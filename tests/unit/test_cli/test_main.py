"""Tests for CLI main module."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import click
import pytest
from click.testing import CliRunner

from mvnlite.cli.main import main, parse_repositories
from mvnlite.core.exceptions.errors import CompileError, ResolutionError
from mvnlite.models.project import Coordinate, EffectiveProject

APP_BODY = """
    <groupId>org.example</groupId>
    <artifactId>app</artifactId>
    <version>1.0.0</version>
    <dependencies>
        <dependency>
            <groupId>org.slf4j</groupId>
            <artifactId>slf4j-api</artifactId>
            <version>2.0.9</version>
        </dependency>
    </dependencies>
"""


@pytest.fixture(autouse=True)
def mock_setup_logging() -> MagicMock:
    """Keep CLI invocations from replacing the test session's log handlers."""
    with patch("mvnlite.cli.main.setup_logging") as mock_setup:
        yield mock_setup


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    """Write a settings file pointing at a temporary local repository."""
    config = temp_dir / "mvnlite.yaml"
    config.write_text(
        "repository:\n"
        f"  local_path: {temp_dir / 'm2'}\n"
        "  remotes: {}\n"
        "compiler:\n"
        "  build_jdk: '17'\n"
        "logging:\n"
        "  level: WARNING\n"
        "  use_rich: false\n"
    )
    return config


class TestParseRepositories:
    """Test repository option parsing."""

    def test_pairs(self) -> None:
        """Test name=url pairs become a map."""
        assert parse_repositories(("a=https://a.example.org", "b=https://b.example.org?x=1")) == {
            "a": "https://a.example.org",
            "b": "https://b.example.org?x=1",
        }

    @pytest.mark.parametrize("value", ["no-separator", "=https://x", "name="])
    def test_malformed(self, value: str) -> None:
        """Test malformed pairs are rejected."""
        with pytest.raises(click.BadParameter):
            parse_repositories((value,))


class TestMainCommand:
    """Test main CLI group."""

    def test_version_flag(self) -> None:
        """Test version flag."""
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_help_without_command(self) -> None:
        """Test the group prints help when no command is given."""
        runner = CliRunner()
        result = runner.invoke(main, [])
        assert result.exit_code == 0
        assert "effective" in result.output

    def test_invalid_repository_option(self, temp_dir: Path, write_pom) -> None:
        """Test a malformed --repository is a usage error."""
        pom = write_pom(temp_dir, APP_BODY)

        runner = CliRunner()
        result = runner.invoke(main, ["-f", str(pom), "-r", "broken", "effective"])

        assert result.exit_code == 2

    def test_config_configures_logging(
        self, temp_dir: Path, write_pom, config_file: Path, mock_setup_logging: MagicMock
    ) -> None:
        """Test logging is set up from the given settings file."""
        pom = write_pom(temp_dir, APP_BODY)

        runner = CliRunner()
        runner.invoke(main, ["-c", str(config_file), "-f", str(pom), "effective"])

        logging_settings = mock_setup_logging.call_args.args[0]
        assert logging_settings.level == "WARNING"
        assert logging_settings.use_rich is False

    def test_invalid_config(self, temp_dir: Path) -> None:
        """Test an unreadable settings file exits with status 1."""
        config = temp_dir / "broken.yaml"
        config.write_text("- just\n- a list\n")

        runner = CliRunner()
        result = runner.invoke(main, ["-c", str(config), "effective"])

        assert result.exit_code == 1
        assert "Invalid Configuration" in result.output

    def test_config_with_rejected_value(self, temp_dir: Path) -> None:
        """Test a settings value that fails validation exits with status 1."""
        config = temp_dir / "loud.yaml"
        config.write_text("logging:\n  level: LOUD\n")

        runner = CliRunner()
        result = runner.invoke(main, ["-c", str(config), "effective"])

        assert result.exit_code == 1
        assert "Invalid Configuration" in result.output
        assert isinstance(result.exception, SystemExit)


class TestEffectiveCommand:
    """Test effective subcommand."""

    def test_effective(self, temp_dir: Path, write_pom, config_file: Path) -> None:
        """Test the composed project is displayed."""
        pom = write_pom(temp_dir, APP_BODY)

        runner = CliRunner()
        result = runner.invoke(main, ["-c", str(config_file), "-f", str(pom), "effective"])

        assert result.exit_code == 0
        assert "org.example:app:1.0.0" in result.output
        assert "slf4j-api" in result.output

    def test_missing_descriptor(self, temp_dir: Path, config_file: Path) -> None:
        """Test a missing descriptor exits with status 1."""
        runner = CliRunner()
        result = runner.invoke(
            main, ["-c", str(config_file), "-f", str(temp_dir / "absent.xml"), "effective"]
        )

        assert result.exit_code == 1
        assert "Invalid Project" in result.output


class TestClasspathCommand:
    """Test classpath subcommand."""

    def test_classpath_from_local_repository(
        self, temp_dir: Path, write_pom, config_file: Path
    ) -> None:
        """Test artifacts already in the local repository are listed."""
        pom = write_pom(temp_dir / "app", APP_BODY)
        jar = temp_dir / "m2" / "org" / "slf4j" / "slf4j-api" / "2.0.9" / "slf4j-api-2.0.9.jar"
        jar.parent.mkdir(parents=True)
        jar.write_bytes(b"PK")

        runner = CliRunner()
        result = runner.invoke(main, ["-c", str(config_file), "-f", str(pom), "classpath"])

        assert result.exit_code == 0
        assert "slf4j-api-2.0.9.jar" in result.output
        assert "classes" in result.output

    @patch("mvnlite.cli.main.load_project")
    def test_classpath_resolution_failure(
        self, mock_load: MagicMock, temp_dir: Path, config_file: Path
    ) -> None:
        """Test resolution failures exit with status 1."""
        mock_load.side_effect = ResolutionError("Could not resolve org.slf4j:slf4j-api:jar:2.0.9")

        runner = CliRunner()
        result = runner.invoke(main, ["-c", str(config_file), "classpath"])

        assert result.exit_code == 1
        assert "Resolution Failed" in result.output


class TestBuildCommands:
    """Test lifecycle subcommands."""

    @pytest.fixture
    def project(self, temp_dir: Path) -> EffectiveProject:
        """Create a placeholder effective project."""
        return EffectiveProject(
            coordinate=Coordinate(group_id="org.example", artifact_id="app", version="1.0.0"),
            descriptor_path=temp_dir / "pom.xml",
        )

    @pytest.mark.parametrize("step", ["clean", "compile", "package", "install"])
    @patch("mvnlite.cli.main.Lifecycle")
    @patch("mvnlite.cli.main.ProjectComposer")
    def test_step_success(
        self,
        mock_composer: MagicMock,
        mock_lifecycle: MagicMock,
        step: str,
        project: EffectiveProject,
        config_file: Path,
    ) -> None:
        """Test each step runs on the lifecycle and exits cleanly."""
        mock_composer.return_value.compose.return_value = project
        lifecycle = mock_lifecycle.from_settings.return_value
        lifecycle.archive = None
        getattr(lifecycle, step).return_value = True

        runner = CliRunner()
        result = runner.invoke(main, ["-c", str(config_file), step])

        assert result.exit_code == 0
        getattr(lifecycle, step).assert_called_once_with()
        assert "Build Succeeded" in result.output

    @patch("mvnlite.cli.main.Lifecycle")
    @patch("mvnlite.cli.main.ProjectComposer")
    def test_step_failure(
        self,
        mock_composer: MagicMock,
        mock_lifecycle: MagicMock,
        project: EffectiveProject,
        config_file: Path,
    ) -> None:
        """Test a failed step exits with status 1 and shows the error."""
        mock_composer.return_value.compose.return_value = project
        lifecycle = mock_lifecycle.from_settings.return_value
        lifecycle.package.return_value = False
        lifecycle.last_error = CompileError("Compilation failed for org.example:app:1.0.0")

        runner = CliRunner()
        result = runner.invoke(main, ["-c", str(config_file), "package"])

        assert result.exit_code == 1
        assert "Build Failed" in result.output
        assert "Compilation failed" in result.output

    @patch("mvnlite.cli.main.Lifecycle")
    @patch("mvnlite.cli.main.ProjectComposer")
    def test_repositories_passed_to_composer(
        self,
        mock_composer: MagicMock,
        mock_lifecycle: MagicMock,
        project: EffectiveProject,
        config_file: Path,
    ) -> None:
        """Test --repository entries reach composition."""
        mock_composer.return_value.compose.return_value = project
        mock_lifecycle.from_settings.return_value.clean.return_value = True

        runner = CliRunner()
        result = runner.invoke(
            main, ["-c", str(config_file), "-r", "local=file:///srv/maven", "clean"]
        )

        assert result.exit_code == 0
        _, repositories = mock_composer.return_value.compose.call_args.args
        assert repositories == {"local": "file:///srv/maven"}

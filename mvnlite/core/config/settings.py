"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mvnlite import __version__
from mvnlite.core.config.loader import ConfigLoader
from mvnlite.core.exceptions.errors import ConfigurationError

DEFAULT_CONFIG_FILE = Path("mvnlite.yaml")


class RepositorySettings(BaseSettings):
    """Artifact repository settings."""

    model_config = SettingsConfigDict(
        env_prefix="MVNLITE_REPOSITORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    local_path: Path = Field(
        default_factory=lambda: Path.home() / ".m2" / "repository",
        description="Local repository root (Maven layout)",
    )
    remotes: dict[str, str] = Field(
        default_factory=lambda: {"central": "https://repo.maven.apache.org/maven2"},
        description="Remote repositories consulted when an artifact is not local",
    )
    verify_ssl: bool = Field(
        default=True,
        description="Verify SSL certificates when downloading artifacts",
    )

    @field_validator("local_path", mode="before")
    @classmethod
    def validate_local_path(cls, v: str | Path) -> Path:
        """Expand ~ in the local repository path."""
        return Path(v).expanduser()


class CompilerSettings(BaseSettings):
    """Compiler configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="MVNLITE_COMPILER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    executable: str = Field(
        default="javac",
        description="Compiler executable",
    )
    build_jdk: str | None = Field(
        default=None,
        description="Build-Jdk manifest value (detected from the compiler when unset)",
    )


class ArchiveSettings(BaseSettings):
    """Archive assembly settings."""

    model_config = SettingsConfigDict(
        env_prefix="MVNLITE_ARCHIVE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    created_by: str = Field(
        default=f"mvnlite {__version__}",
        description="Created-By manifest value",
    )
    reproducible: bool = Field(
        default=False,
        description="Sort archive entries by name instead of traversal order",
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="MVNLITE_LOGGING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = Field(
        default="INFO",
        description="Log level",
    )
    format: str = Field(
        default="[%(name)s] %(message)s",
        description="Log format string",
    )
    file: Path | None = Field(
        default=None,
        description="Log file path",
    )
    use_rich: bool = Field(
        default=True,
        description="Use Rich console for output",
    )

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("file", mode="before")
    @classmethod
    def validate_file(cls, v: str | None) -> Path | None:
        """Validate and convert file to Path."""
        if v is None or v == "":
            return None
        return Path(v)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="MVNLITE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    repository: RepositorySettings = Field(default_factory=RepositorySettings)
    compiler: CompilerSettings = Field(default_factory=CompilerSettings)
    archive: ArchiveSettings = Field(default_factory=ArchiveSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            Settings instance with values from YAML.

        Raises:
            ConfigurationError: If the file cannot be loaded or a value fails
                validation.
        """
        loader = ConfigLoader(path)
        loader.load()

        try:
            return cls(
                repository=RepositorySettings(**loader.get_section("repository")),
                compiler=CompilerSettings(**loader.get_section("compiler")),
                archive=ArchiveSettings(**loader.get_section("archive")),
                logging=LoggingSettings(**loader.get_section("logging")),
            )
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid settings in configuration file: {path}",
                config_key=str(path),
                details={"errors": [error["msg"] for error in e.errors()]},
            ) from e

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from the given file or the default location.

        Priority: mvnlite.yaml > environment variables > .env > defaults.
        Values present in the YAML file are passed as init arguments and win
        over the environment; keys it omits still read the environment.

        Args:
            path: Explicit YAML settings file.

        Returns:
            Settings instance.
        """
        if path is not None:
            return cls.from_yaml(path)
        if DEFAULT_CONFIG_FILE.exists():
            return cls.from_yaml(DEFAULT_CONFIG_FILE)
        return cls()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings singleton.
    """
    return Settings.load()

"""Build planning, manifest and lifecycle data models."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

MANIFEST_LINE_BYTES = 70
MANIFEST_VERSION_HEADER = "Manifest-Version: 1.0"


class LifecycleState(str, Enum):
    """Lifecycle progress of a project."""

    CLEAN = "clean"
    COMPILED = "compiled"
    PACKAGED = "packaged"
    INSTALLED = "installed"
    FAILED = "failed"


class BuildPlan(BaseModel):
    """Stale sources and classpath for one compile step."""

    stale_sources: set[Path] = Field(default_factory=set)
    classpath: str = ""

    @property
    def is_up_to_date(self) -> bool:
        return not self.stale_sources


class ManifestEntry(BaseModel):
    """A single ``Key: Value`` manifest attribute."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str

    def render(self) -> str:
        """Render the entry, wrapping every 70 bytes.

        Continuation lines start with a single space. Multi-byte characters
        are never split across lines.

        Returns:
            Rendered entry without a trailing newline.
        """
        lines: list[str] = []
        current: list[str] = []
        size = 0
        for char in f"{self.key}: {self.value}":
            width = len(char.encode("utf-8"))
            if size + width > MANIFEST_LINE_BYTES:
                lines.append("".join(current))
                current, size = [], 0
            current.append(char)
            size += width
        lines.append("".join(current))
        return "\n ".join(lines)


class BaselineManifest(BaseModel):
    """Entries every archive manifest starts from."""

    model_config = ConfigDict(frozen=True)

    created_by: str
    built_by: str
    build_jdk: str

    def entries(self) -> dict[str, str]:
        return {
            "Created-By": self.created_by,
            "Built-By": self.built_by,
            "Build-Jdk": self.build_jdk,
        }


@dataclass
class CompileResult:
    """Result of a compiler invocation.

    Attributes:
        success: Whether the compiler reported success.
        return_code: Exit code of the compiler.
        stdout: Standard output from the compiler.
        stderr: Diagnostics from the compiler.
        command: The command line that was executed.
        duration_seconds: Time taken by the compiler.
    """

    success: bool
    return_code: int = 0
    stdout: str = ""
    stderr: str = ""
    command: list[str] | None = None
    duration_seconds: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "success": self.success,
            "return_code": self.return_code,
            "duration_seconds": self.duration_seconds,
            "command": self.command,
        }

"""Compiler collaborator backed by the javac executable."""

import re
import shutil
import subprocess
import time
from pathlib import Path
from typing import Protocol

from mvnlite.core.config.settings import get_settings
from mvnlite.core.logger.logger import get_logger
from mvnlite.models.build import CompileResult

logger = get_logger(__name__)

JAVAC_VERSION_PATTERN = re.compile(r"javac\s+(\S+)")


class Compiler(Protocol):
    """Compiles a set of source files into an output directory."""

    def compile(
        self,
        options: list[str],
        classpath: str,
        output_directory: Path,
        sources: list[Path],
    ) -> CompileResult:
        """Compile ``sources``.

        Args:
            options: Flat compiler option list.
            classpath: Classpath string.
            output_directory: Directory receiving compiled units.
            sources: Source files; never empty.

        Returns:
            CompileResult describing the outcome.
        """
        ...


class JavacCompiler:
    """Runs ``javac`` as a subprocess."""

    def __init__(self, executable: str | None = None) -> None:
        """Initialize the compiler.

        Args:
            executable: javac binary (default: from settings, looked up in PATH).
        """
        self.executable = executable or get_settings().compiler.executable
        self._version: str | None = None

    def is_available(self) -> bool:
        """Check whether the javac binary can be found."""
        return shutil.which(self.executable) is not None

    def version(self) -> str | None:
        """Return the compiler version, e.g. ``17.0.9``, or None if unknown."""
        if self._version:
            return self._version

        try:
            completed = subprocess.run(
                [self.executable, "-version"],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            logger.debug(f"Could not run {self.executable} -version: {e}")
            return None

        # Older JDKs print the version on stderr
        match = JAVAC_VERSION_PATTERN.search(completed.stdout + completed.stderr)
        if match:
            self._version = match.group(1)
        return self._version

    def build_command(
        self,
        options: list[str],
        classpath: str,
        output_directory: Path,
        sources: list[Path],
    ) -> list[str]:
        return [
            self.executable,
            *options,
            "-cp",
            classpath,
            "-d",
            str(output_directory),
            *(str(source) for source in sources),
        ]

    def compile(
        self,
        options: list[str],
        classpath: str,
        output_directory: Path,
        sources: list[Path],
    ) -> CompileResult:
        """Compile ``sources`` with javac.

        Raises:
            ValueError: If ``sources`` is empty.
        """
        if not sources:
            raise ValueError("javac must be given at least one source file")

        command = self.build_command(options, classpath, output_directory, sources)
        logger.debug(f"Running: {' '.join(command)}")

        start_time = time.time()
        try:
            completed = subprocess.run(command, capture_output=True, text=True, check=False)
        except OSError as e:
            return CompileResult(
                success=False,
                return_code=-1,
                stderr=str(e),
                command=command,
                duration_seconds=time.time() - start_time,
            )

        return CompileResult(
            success=completed.returncode == 0,
            return_code=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
            command=command,
            duration_seconds=time.time() - start_time,
        )

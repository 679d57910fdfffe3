"""Pytest configuration and shared fixtures."""

import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Generator

import pytest

from mvnlite.models.build import BaselineManifest
from mvnlite.models.project import Coordinate, EffectiveProject

POM_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
    <modelVersion>4.0.0</modelVersion>
{body}
</project>
"""


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory that is cleaned up after the test.

    Yields:
        Path to the temporary directory.
    """
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def write_pom() -> Callable[[Path, str], Path]:
    """Return a helper writing a pom.xml with the given body into a directory.

    Returns:
        Callable taking (directory, body xml) and returning the pom path.
    """

    def _write(directory: Path, body: str) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        pom = directory / "pom.xml"
        pom.write_text(POM_TEMPLATE.format(body=body), encoding="utf-8")
        return pom

    return _write


@pytest.fixture
def leaf_project(temp_dir: Path) -> EffectiveProject:
    """Create a leaf project rooted in the temporary directory.

    Args:
        temp_dir: Temporary directory fixture.

    Returns:
        EffectiveProject with no dependencies and no resolved artifacts.
    """
    project_dir = temp_dir / "app"
    (project_dir / "src" / "main" / "java").mkdir(parents=True)
    descriptor = project_dir / "pom.xml"
    descriptor.write_text(
        POM_TEMPLATE.format(
            body="    <groupId>org.example</groupId>\n"
            "    <artifactId>app</artifactId>\n"
            "    <version>1.0.0</version>"
        ),
        encoding="utf-8",
    )
    return EffectiveProject(
        coordinate=Coordinate(group_id="org.example", artifact_id="app", version="1.0.0"),
        descriptor_path=descriptor,
    )


@pytest.fixture
def baseline() -> BaselineManifest:
    """Create a fixed baseline manifest."""
    return BaselineManifest(created_by="mvnlite test", built_by="tester", build_jdk="17.0.9")

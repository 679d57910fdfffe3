"""Maven repository layout."""

from pathlib import PurePosixPath


def artifact_path(
    group_id: str,
    artifact_id: str,
    version: str,
    extension: str = "jar",
    classifier: str | None = None,
) -> PurePosixPath:
    """Return the repository-relative path of an artifact.

    Example: ``org.slf4j:slf4j-api:2.0.9`` maps to
    ``org/slf4j/slf4j-api/2.0.9/slf4j-api-2.0.9.jar``.
    """
    file_name = f"{artifact_id}-{version}"
    if classifier:
        file_name += f"-{classifier}"
    return PurePosixPath(*group_id.split("."), artifact_id, version, f"{file_name}.{extension}")

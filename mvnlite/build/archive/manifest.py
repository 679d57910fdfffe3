"""Archive manifest construction."""

import getpass

from mvnlite.build.compiler.javac import JavacCompiler
from mvnlite.core.config.settings import Settings, get_settings
from mvnlite.core.logger.logger import get_logger
from mvnlite.models.build import MANIFEST_VERSION_HEADER, BaselineManifest, ManifestEntry

logger = get_logger(__name__)


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"


def detect_baseline(
    settings: Settings | None = None,
    compiler: JavacCompiler | None = None,
) -> BaselineManifest:
    """Build the baseline manifest for this invocation.

    Args:
        settings: Settings to read Created-By and a Build-Jdk override from.
        compiler: Compiler queried for its version when no override is set.

    Returns:
        BaselineManifest with Created-By, Built-By and Build-Jdk.
    """
    settings = settings or get_settings()
    build_jdk = settings.compiler.build_jdk
    if build_jdk is None and compiler is not None:
        build_jdk = compiler.version()

    return BaselineManifest(
        created_by=settings.archive.created_by,
        built_by=_current_user(),
        build_jdk=build_jdk or "unknown",
    )


def render_manifest(baseline: BaselineManifest, entries: dict[str, str]) -> str:
    """Render manifest text.

    ``entries`` override baseline entries with the same key. The version
    header always comes first and cannot be overridden.

    Args:
        baseline: Baseline entries.
        entries: Project-declared manifest entries.

    Returns:
        Newline-terminated manifest text.
    """
    merged = baseline.entries()
    for key, value in entries.items():
        if key == "Manifest-Version":
            logger.debug("Ignoring declared Manifest-Version entry")
            continue
        merged[key] = value

    lines = [MANIFEST_VERSION_HEADER]
    lines.extend(ManifestEntry(key=key, value=value).render() for key, value in merged.items())
    return "\n".join(lines) + "\n"

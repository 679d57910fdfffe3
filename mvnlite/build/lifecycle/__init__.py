"""Build lifecycle."""

from mvnlite.build.lifecycle.controller import Lifecycle
from mvnlite.build.lifecycle.loader import load_project, resolve_project

__all__ = ["Lifecycle", "load_project", "resolve_project"]

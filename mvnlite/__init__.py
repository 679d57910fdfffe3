"""mvnlite - in-process incremental builds for Maven projects."""

__version__ = "0.1.0"

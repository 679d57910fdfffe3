"""Compilation planning and the javac collaborator."""

from mvnlite.build.compiler.javac import Compiler, JavacCompiler
from mvnlite.build.compiler.planner import COMPILED_SUFFIX, SOURCE_SUFFIX, BuildPlanner

__all__ = [
    "Compiler",
    "JavacCompiler",
    "BuildPlanner",
    "SOURCE_SUFFIX",
    "COMPILED_SUFFIX",
]

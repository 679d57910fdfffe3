"""Lifecycle controller: clean, compile, package, install."""

import shutil
from collections.abc import Callable
from pathlib import Path

from mvnlite.build.archive.assembler import ArchiveAssembler
from mvnlite.build.archive.manifest import detect_baseline
from mvnlite.build.compiler.javac import Compiler, JavacCompiler
from mvnlite.build.compiler.planner import BuildPlanner
from mvnlite.build.repository.installer import ArtifactInstaller, LocalRepositoryInstaller
from mvnlite.build.repository.resolver import DependencyResolver, RepositoryResolver
from mvnlite.core.config.settings import Settings, get_settings
from mvnlite.core.exceptions.errors import CompileError, MvnLiteError
from mvnlite.core.logger.logger import get_logger
from mvnlite.models.build import LifecycleState
from mvnlite.models.project import EffectiveProject

logger = get_logger(__name__)


class Lifecycle:
    """Runs build steps for one project.

    Each step returns True on success and False on failure; failures are
    logged, never raised. ``package`` runs ``compile`` first and ``install``
    runs ``package`` first, stopping at the first failing step. Nothing is
    rolled back: output from a failed step stays until ``clean``.

    For an aggregator every step is applied to its modules in declaration
    order, stopping at the first module that fails.
    """

    def __init__(
        self,
        project: EffectiveProject,
        resolver: DependencyResolver,
        compiler: Compiler,
        assembler: ArchiveAssembler,
        installer: ArtifactInstaller,
        planner: BuildPlanner | None = None,
    ) -> None:
        self.project = project
        self.resolver = resolver
        self.compiler = compiler
        self.assembler = assembler
        self.installer = installer
        self.planner = planner or BuildPlanner()
        self.state = LifecycleState.CLEAN
        self.archive: Path | None = None
        self.last_error: MvnLiteError | OSError | None = None
        self.modules = [
            Lifecycle(module, resolver, compiler, assembler, installer, self.planner)
            for module in project.modules
        ]

    @classmethod
    def from_settings(
        cls,
        project: EffectiveProject,
        settings: Settings | None = None,
    ) -> "Lifecycle":
        """Create a lifecycle wired with the default collaborators."""
        settings = settings or get_settings()
        compiler = JavacCompiler(settings.compiler.executable)
        return cls(
            project,
            resolver=RepositoryResolver(
                local_repository=settings.repository.local_path,
                verify_ssl=settings.repository.verify_ssl,
            ),
            compiler=compiler,
            assembler=ArchiveAssembler(
                detect_baseline(settings, compiler),
                reproducible=settings.archive.reproducible,
            ),
            installer=LocalRepositoryInstaller(settings.repository.local_path),
        )

    def clean(self) -> bool:
        """Delete the target directory."""
        if self.project.is_aggregator and not self._run_modules("clean"):
            return False
        return self._run_step("clean", self._clean, LifecycleState.CLEAN)

    def compile(self) -> bool:
        """Compile stale sources, copying resources first."""
        if self.project.is_aggregator:
            return self._finish_modules("compile", LifecycleState.COMPILED)
        return self._run_step("compile", self._compile, LifecycleState.COMPILED)

    def package(self) -> bool:
        """Compile, then build the archive."""
        if self.project.is_aggregator:
            return self._finish_modules("package", LifecycleState.PACKAGED)
        if not self.compile():
            return False
        return self._run_step("package", self._package, LifecycleState.PACKAGED)

    def install(self) -> bool:
        """Package, then publish the archive and descriptor."""
        if self.project.is_aggregator:
            return self._finish_modules("install", LifecycleState.INSTALLED)
        if not self.package():
            return False
        return self._run_step("install", self._install, LifecycleState.INSTALLED)

    def copy_resources(self) -> int:
        """Copy every resource file into the output directory.

        Returns:
            Number of files copied.
        """
        source = self.project.resources_directory
        output = self.project.output_directory
        if not source.is_dir():
            return 0

        copied = 0
        for path in source.rglob("*"):
            if not path.is_file():
                continue
            destination = output / path.relative_to(source)
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(path, destination)
            copied += 1

        logger.debug(f"Copied {copied} resource(s) to {output}")
        return copied

    def _run_step(
        self,
        name: str,
        action: Callable[[], bool],
        success_state: LifecycleState,
    ) -> bool:
        coordinate = self.project.coordinate
        try:
            succeeded = action()
        except (MvnLiteError, OSError) as e:
            self.last_error = e
            message = e.message if isinstance(e, MvnLiteError) else str(e)
            logger.error(f"{name} failed for {coordinate}: {message}")
            if isinstance(e, CompileError) and e.details.get("output"):
                logger.error(e.details["output"])
            succeeded = False

        self.state = success_state if succeeded else LifecycleState.FAILED
        return succeeded

    def _run_modules(self, step: str) -> bool:
        for module in self.modules:
            if not getattr(module, step)():
                self.last_error = module.last_error
                self.state = LifecycleState.FAILED
                return False
        return True

    def _finish_modules(self, step: str, success_state: LifecycleState) -> bool:
        succeeded = self._run_modules(step)
        if succeeded:
            self.state = success_state
        return succeeded

    def _clean(self) -> bool:
        target = self.project.target_directory
        if target.is_symlink():
            target.unlink()
        elif target.exists():
            shutil.rmtree(target)
        logger.info(f"Cleaned {target}")
        return True

    def _compile(self) -> bool:
        project = self.project
        output = project.output_directory
        output.mkdir(parents=True, exist_ok=True)

        if project.resolved_artifacts is None:
            project.attach_resolved_artifacts(
                self.resolver.resolve(project.dependencies, project.repositories)
            )

        plan = self.planner.plan(project)
        if plan.is_up_to_date:
            logger.info(f"Nothing to compile for {project.coordinate}: all classes are up to date")
            return True

        self.copy_resources()
        sources = sorted(plan.stale_sources)
        logger.info(f"Compiling {len(sources)} source file(s) to {output}")
        result = self.compiler.compile(project.compiler_options, plan.classpath, output, sources)
        if not result.success:
            raise CompileError(
                f"Compilation failed for {project.coordinate}",
                return_code=result.return_code,
                output=result.stderr or result.stdout,
            )
        return True

    def _package(self) -> bool:
        self.archive = self.assembler.assemble(self.project)
        return True

    def _install(self) -> bool:
        archive = self.archive or self.assembler.archive_path(self.project)
        self.installer.install(self.project.coordinate, archive, self.project.descriptor_path)
        return True

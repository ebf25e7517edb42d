"""Static content regeneration for a deployment.

Runs the fixed regeneration sequence: clean generated directories,
stage permissions, deploy static content and CSS through the application
CLI, compile DI, and lock the generated output. Application commands are
always spawned as separate processes so the compiler never sees class or
autoloader state left behind in this process.

Steps run strictly in order. The first error aborts the sequence and
propagates unchanged; completed steps are not rolled back.
"""

import fnmatch
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from deployfs.core.config import DeployConfig
from deployfs.core.directories import DirectoryCode, DirectoryRegistry
from deployfs.core.output import OutputSink
from deployfs.core.store import StoreConfiguration
from deployfs.filesystem.driver import FilesystemDriver
from deployfs.filesystem.writer import DirectoryWriter
from deployfs.utils.shell import ProcessExecutor, format_command

logger = logging.getLogger(__name__)

# File access permissions after locking
PERMISSIONS_FILE = 0o640

# Directory access permissions
PERMISSIONS_DIR = 0o750

# Cleaned before regeneration starts. STATIC_VIEW is here so a finished run
# leaves only the static view marker files behind.
REGENERATE_CLEANUP: tuple[DirectoryCode, ...] = (
    DirectoryCode.CACHE,
    DirectoryCode.GENERATION,
    DirectoryCode.DI,
    DirectoryCode.STATIC_VIEW,
    DirectoryCode.TMP_MATERIALIZATION,
)

# Cleaned again right before the compiler runs
COMPILE_CLEANUP: tuple[DirectoryCode, ...] = (
    DirectoryCode.CACHE,
    DirectoryCode.GENERATION,
    DirectoryCode.DI,
)

# Locked once regeneration is complete
LOCKED_DIRECTORIES: tuple[DirectoryCode, ...] = (
    DirectoryCode.GENERATION,
    DirectoryCode.DI,
    DirectoryCode.TMP_MATERIALIZATION,
)


@dataclass(frozen=True, slots=True)
class PlannedStep:
    """One step of the regeneration sequence, for display.

    Attributes:
        description: What the step does.
        command: Command line the step spawns, None for filesystem-only steps.
    """

    description: str
    command: str | None = None


class DeploymentFilesystemManager:
    """Regenerates static content and generated code for an application.

    All collaborators are injected; see :func:`create_manager` for the
    default wiring from a :class:`DeployConfig`.
    """

    def __init__(
        self,
        config: DeployConfig,
        registry: DirectoryRegistry,
        driver: FilesystemDriver,
        writer: DirectoryWriter,
        store: StoreConfiguration,
        executor: ProcessExecutor,
    ) -> None:
        self._config = config
        self._registry = registry
        self._driver = driver
        self._writer = writer
        self._store = store
        self._executor = executor

    def regenerate_static(self, output: OutputSink) -> None:
        """Run the full regeneration sequence.

        Args:
            output: Receives progress messages and forwarded command output.

        Raises:
            OSError: If a filesystem operation fails.
            subprocess.CalledProcessError: If an application command fails.
            subprocess.TimeoutExpired: If an application command times out.
        """
        logger.info("Cleaning %s", _codes(REGENERATE_CLEANUP))
        self.cleanup_filesystem(REGENERATE_CLEANUP)

        logger.info("Opening permissions on %s", DirectoryCode.STATIC_VIEW.value)
        self.change_permissions([DirectoryCode.STATIC_VIEW], PERMISSIONS_DIR, PERMISSIONS_DIR)

        self.deploy_static_content(output)
        self.deploy_css(output)
        self.compile(output)

        logger.info("Locking %s", _codes(LOCKED_DIRECTORIES))
        self.lock_static_resources()

    def cleanup_filesystem(self, codes: Iterable[DirectoryCode]) -> None:
        """Empty the given directories.

        The static-view directory keeps every entry whose name matches one
        of the configured exclusion patterns. Every other directory is
        emptied completely. Directories themselves are never removed.

        Args:
            codes: Directories to clean.
        """
        for code in codes:
            if code is DirectoryCode.STATIC_VIEW:
                self._cleanup_static_view()
            else:
                logger.debug("Emptying %s", code.value)
                self._writer.delete_all(code)

    def change_permissions(
        self,
        codes: Iterable[DirectoryCode],
        dir_mode: int,
        file_mode: int,
    ) -> None:
        """Recursively apply modes to directories, creating missing ones.

        Args:
            codes: Directories to change.
            dir_mode: Mode for directories.
            file_mode: Mode for files.
        """
        for code in codes:
            path = self._registry.resolve(code)
            if self._driver.exists(path):
                self._writer.chmod_recursive(code, dir_mode, file_mode)
            else:
                self._driver.create_directory(path, dir_mode)

    def lock_static_resources(self) -> None:
        """Tighten permissions on the generated directories."""
        self.change_permissions(LOCKED_DIRECTORIES, PERMISSIONS_DIR, PERMISSIONS_FILE)

    def deploy_static_content(self, output: OutputSink) -> None:
        """Deploy static content for every configured locale in one command."""
        output.write_line("Static content deployment start")
        logger.info("Deploying static content")
        output.write_line(self._executor.run(self.build_static_content_command()))
        output.write_line("Static content deployment complete")

    def deploy_css(self, output: OutputSink) -> None:
        """Deploy CSS with one command per theme/locale pair."""
        for command in self.build_css_commands():
            logger.info("Deploying CSS: %s", format_command(command))
            output.write_line(self._executor.run(command))
        output.write_line("CSS deployment complete")

    def compile(self, output: OutputSink) -> None:
        """Clean generated code and run the DI compiler in a fresh process."""
        output.write_line("Start compilation")
        self.cleanup_filesystem(COMPILE_CLEANUP)
        logger.info("Compiling dependency injection configuration")
        output.write_line(self._executor.run(self.build_compile_command()))
        output.write_line("Compilation complete")

    def build_static_content_command(self) -> list[str]:
        return [*self._config.cli_command, "setup:static-content:deploy", *self._store.locales()]

    def build_css_commands(self) -> list[list[str]]:
        commands: list[list[str]] = []
        for pair in self._store.theme_locale_pairs():
            theme = pair.theme or self._config.default_theme
            commands.append(
                [
                    *self._config.cli_command,
                    "dev:css:deploy",
                    "less",
                    f"--theme={theme}",
                    f"--locale={pair.locale}",
                ]
            )
        return commands

    def build_compile_command(self) -> list[str]:
        return [*self._config.cli_command, "setup:di:compile-multi-tenant"]

    def plan(self) -> list[PlannedStep]:
        """Describe the regeneration sequence without running anything."""
        steps = [
            PlannedStep(f"Clean {_codes(REGENERATE_CLEANUP)}"),
            PlannedStep(
                f"Set {DirectoryCode.STATIC_VIEW.value} to "
                f"dirs={PERMISSIONS_DIR:04o} files={PERMISSIONS_DIR:04o}"
            ),
            PlannedStep(
                "Deploy static content",
                format_command(self.build_static_content_command()),
            ),
        ]
        steps.extend(
            PlannedStep("Deploy CSS", format_command(command))
            for command in self.build_css_commands()
        )
        steps.append(PlannedStep(f"Clean {_codes(COMPILE_CLEANUP)}"))
        steps.append(PlannedStep("Compile", format_command(self.build_compile_command())))
        steps.append(
            PlannedStep(
                f"Lock {_codes(LOCKED_DIRECTORIES)} to "
                f"dirs={PERMISSIONS_DIR:04o} files={PERMISSIONS_FILE:04o}"
            )
        )
        return steps

    def _cleanup_static_view(self) -> None:
        path = self._registry.resolve(DirectoryCode.STATIC_VIEW)
        if not self._driver.exists(path):
            return

        for child in self._driver.list_children(path):
            if self._is_excluded(child.name):
                logger.debug("Keeping %s", child)
                continue
            if self._driver.is_file(child):
                self._driver.delete_file(child)
            else:
                self._driver.delete_directory(child)

    def _is_excluded(self, name: str) -> bool:
        return any(
            fnmatch.fnmatchcase(name, pattern) for pattern in self._config.static_view_exclusions
        )


def _codes(codes: Iterable[DirectoryCode]) -> str:
    return ", ".join(code.value for code in codes)


def create_manager(config: DeployConfig) -> DeploymentFilesystemManager:
    """Wire a DeploymentFilesystemManager with the local filesystem and shell.

    Args:
        config: Deployment configuration.

    Returns:
        A ready-to-run manager.
    """
    registry = DirectoryRegistry(config.resolved_root, config.directories)
    driver = FilesystemDriver()
    return DeploymentFilesystemManager(
        config=config,
        registry=registry,
        driver=driver,
        writer=DirectoryWriter(registry, driver),
        store=StoreConfiguration(config.stores),
        executor=ProcessExecutor(
            timeout=config.timeout_seconds,
            cwd=str(config.resolved_root),
        ),
    )

"""Directory-level write operations addressed by directory code."""

import logging

from deployfs.core.directories import DirectoryCode, DirectoryRegistry
from deployfs.filesystem.driver import FilesystemDriver

logger = logging.getLogger(__name__)


class DirectoryWriter:
    """Bulk operations on a whole managed directory.

    Attributes:
        _registry: Resolves directory codes to paths.
        _driver: Performs the primitive filesystem operations.
    """

    def __init__(self, registry: DirectoryRegistry, driver: FilesystemDriver) -> None:
        self._registry = registry
        self._driver = driver

    def delete_all(self, code: DirectoryCode) -> None:
        """Remove everything inside a directory, keeping the directory itself.

        A directory that does not exist is left alone.

        Args:
            code: Directory to empty.
        """
        path = self._registry.resolve(code)
        if not self._driver.exists(path):
            logger.debug("Skipping cleanup of missing %s directory %s", code.value, path)
            return

        for child in self._driver.list_children(path):
            if self._driver.is_file(child):
                self._driver.delete_file(child)
            else:
                self._driver.delete_directory(child)

    def chmod_recursive(self, code: DirectoryCode, dir_mode: int, file_mode: int) -> None:
        """Apply dir_mode/file_mode to every directory/file under a directory."""
        self._driver.chmod_recursive(self._registry.resolve(code), dir_mode, file_mode)

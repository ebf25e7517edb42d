"""Local filesystem driver.

Thin wrapper over pathlib, os and shutil with the primitive operations
the deployment steps need. Errors are never caught here: every OSError
reaches the caller unchanged.
"""

import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def _raise(error: OSError) -> None:
    raise error


class FilesystemDriver:
    """Primitive filesystem operations on absolute paths."""

    def exists(self, path: Path) -> bool:
        """Check whether a path exists (dead symlinks count as missing)."""
        return path.exists()

    def list_children(self, path: Path) -> list[Path]:
        """List the immediate children of a directory as full paths.

        Args:
            path: Directory to list.

        Returns:
            Child paths sorted by name.

        Raises:
            FileNotFoundError: If the directory does not exist.
            NotADirectoryError: If the path is not a directory.
        """
        return sorted(path.iterdir())

    def is_file(self, path: Path) -> bool:
        """Check whether a path is a regular file (or a symlink to one)."""
        return path.is_file()

    def delete_file(self, path: Path) -> None:
        """Delete a single file or symlink."""
        logger.debug("Deleting file %s", path)
        path.unlink()

    def delete_directory(self, path: Path) -> None:
        """Delete a directory and everything below it.

        Symlinks (including dead ones and links to directories) are
        unlinked rather than followed.
        """
        logger.debug("Deleting directory %s", path)
        if path.is_symlink():
            path.unlink()
            return
        shutil.rmtree(path)

    def create_directory(self, path: Path, mode: int) -> None:
        """Create a directory, including missing parents, with an exact mode.

        The mode is applied with chmod after creation so the process umask
        does not narrow it. Only the final directory gets mode; missing
        parents are created with the default mode minus the umask.
        """
        logger.debug("Creating directory %s with mode %04o", path, mode)
        path.mkdir(mode=mode, parents=True, exist_ok=True)
        path.chmod(mode)

    def chmod_recursive(self, path: Path, dir_mode: int, file_mode: int) -> None:
        """Apply modes to a directory tree.

        Directories (the root included) receive dir_mode, files receive
        file_mode. Symlinks are neither followed nor modified. The tree is
        walked bottom-up so a restrictive dir_mode cannot block traversal.

        Args:
            path: Root directory of the tree.
            dir_mode: Mode for every directory.
            file_mode: Mode for every file.
        """
        logger.debug(
            "Changing permissions under %s to dirs=%04o files=%04o", path, dir_mode, file_mode
        )
        # os.walk never descends into symlinked directories, so only real
        # directories ever show up as dirpath
        for dirpath, _dirnames, filenames in os.walk(path, topdown=False, onerror=_raise):
            for name in filenames:
                file_path = os.path.join(dirpath, name)
                if not os.path.islink(file_path):
                    os.chmod(file_path, file_mode)
            os.chmod(dirpath, dir_mode)

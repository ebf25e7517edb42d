"""Filesystem access for deployment steps.

This module provides the primitive filesystem driver and the
directory-level writer built on top of it.
"""

from deployfs.filesystem.driver import FilesystemDriver
from deployfs.filesystem.writer import DirectoryWriter

__all__ = [
    "DirectoryWriter",
    "FilesystemDriver",
]

"""Directory codes and their resolution to absolute paths.

Every directory deployfs touches is addressed by a symbolic code. The
registry maps codes onto the application's directory layout.
"""

from collections.abc import Mapping
from enum import Enum
from pathlib import Path


class DirectoryCode(str, Enum):
    """Managed directory roles.

    Attributes:
        CACHE: Application cache.
        GENERATION: Generated code (factories, proxies, interceptors).
        DI: Compiled dependency-injection configuration.
        STATIC_VIEW: Published static content served to clients.
        TMP_MATERIALIZATION: Pre-processed view files used while deploying.
    """

    CACHE = "cache"
    GENERATION = "generation"
    DI = "di"
    STATIC_VIEW = "static_view"
    TMP_MATERIALIZATION = "tmp_materialization"


# Layout relative to the application root
DEFAULT_LAYOUT: dict[DirectoryCode, str] = {
    DirectoryCode.CACHE: "var/cache",
    DirectoryCode.GENERATION: "var/generation",
    DirectoryCode.DI: "var/di",
    DirectoryCode.STATIC_VIEW: "pub/static",
    DirectoryCode.TMP_MATERIALIZATION: "var/view_preprocessed",
}


class DirectoryRegistry:
    """Resolves directory codes to absolute paths under an application root.

    Overrides may be relative (joined to the root) or absolute.
    """

    def __init__(
        self,
        root: Path,
        overrides: Mapping[DirectoryCode, str | Path] | None = None,
    ) -> None:
        self._root = root.resolve()
        self._layout: dict[DirectoryCode, Path] = {
            code: Path(rel) for code, rel in DEFAULT_LAYOUT.items()
        }
        for code, path in (overrides or {}).items():
            self._layout[DirectoryCode(code)] = Path(path)

    @property
    def root(self) -> Path:
        """Absolute application root."""
        return self._root

    def resolve(self, code: DirectoryCode) -> Path:
        """Return the absolute path for a directory code.

        Raises:
            KeyError: If the code has no layout entry.
        """
        path = self._layout[code]
        if path.is_absolute():
            return path
        return self._root / path

    def items(self) -> list[tuple[DirectoryCode, Path]]:
        """All codes with their resolved paths, in declaration order."""
        return [(code, self.resolve(code)) for code in DirectoryCode]

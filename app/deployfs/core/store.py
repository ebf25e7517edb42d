"""Store configuration: which locales and themes to deploy."""

from collections.abc import Iterable
from dataclasses import dataclass

from deployfs.core.config import StoreEntry


@dataclass(frozen=True, slots=True)
class ThemeLocalePair:
    """A storefront theme paired with a locale.

    Attributes:
        theme: Theme identifier, None when the store uses the default.
        locale: Locale code.
    """

    theme: str | None
    locale: str


class StoreConfiguration:
    """Read-only view over the configured storefront variants."""

    def __init__(self, stores: Iterable[StoreEntry]) -> None:
        self._pairs: list[ThemeLocalePair] = []
        for store in stores:
            pair = ThemeLocalePair(theme=store.theme, locale=store.locale)
            if pair not in self._pairs:
                self._pairs.append(pair)

    def locales(self) -> list[str]:
        """Unique locales, in configuration order."""
        return list(dict.fromkeys(pair.locale for pair in self._pairs))

    def theme_locale_pairs(self) -> list[ThemeLocalePair]:
        """Unique theme/locale pairs, in configuration order."""
        return list(self._pairs)

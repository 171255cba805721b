"""
Theme preference store

Keeps the player's light/dark choice under a storage key in any mutable
mapping. The default mapping is an in-memory dict, so nothing is
written to disk.
"""

import logging
from enum import Enum
from typing import MutableMapping, Optional, Union

from .config import config

logger = logging.getLogger(__name__)


class Theme(str, Enum):
    """Supported themes."""
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class ThemeStore:
    """Reads and writes the theme preference."""

    def __init__(
        self,
        storage: Optional[MutableMapping[str, str]] = None,
        storage_key: Optional[str] = None,
        default_theme: Union[Theme, str, None] = None,
    ):
        self.storage = storage if storage is not None else {}
        self.storage_key = storage_key or config.ui.theme_storage_key
        self.default_theme = Theme(default_theme or config.ui.default_theme)

    @property
    def theme(self) -> Theme:
        """Stored theme, or the default when missing or unrecognised."""
        raw = self.storage.get(self.storage_key)
        if raw is None:
            return self.default_theme
        try:
            return Theme(raw)
        except ValueError:
            logger.warning(f"Ignoring unknown theme {raw!r} under {self.storage_key!r}")
            return self.default_theme

    def set_theme(self, theme: Union[Theme, str]) -> Theme:
        """
        Store a theme.

        Raises:
            ValueError: If theme is not light, dark or system
        """
        theme = Theme(theme)
        self.storage[self.storage_key] = theme.value
        return theme

    def resolve(self, prefers_dark: bool = False) -> Theme:
        """Concrete theme to draw with; system follows prefers_dark."""
        theme = self.theme
        if theme is Theme.SYSTEM:
            return Theme.DARK if prefers_dark else Theme.LIGHT
        return theme

    def toggle(self, prefers_dark: bool = False) -> Theme:
        """Flip between light and dark."""
        current = self.resolve(prefers_dark)
        return self.set_theme(Theme.LIGHT if current is Theme.DARK else Theme.DARK)

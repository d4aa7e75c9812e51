"""Enum types for time-tracker."""

from enum import Enum


class Theme(str, Enum):
    """Display theme preference."""

    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def values(cls) -> list[str]:
        """Return list of all theme values."""
        return [t.value for t in cls]

    @classmethod
    def default(cls) -> "Theme":
        return cls.LIGHT

"""Config services for view settings."""

from ranktable.services.config.view_settings import (
    ViewSettings,
    ViewSettingsManager,
)

__all__ = [
    "ViewSettings",
    "ViewSettingsManager",
]

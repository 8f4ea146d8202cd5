"""Configuration package."""

from lambdatype.config.settings import CheckerSettings, load_settings

__all__ = [
    "CheckerSettings",
    "load_settings",
]

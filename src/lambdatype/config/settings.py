"""Checker settings."""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from lambdatype.core.walk import DEFAULT_MAX_DEPTH


class CheckerSettings(BaseSettings):
    """Type checker settings.

    ``max_depth`` bounds every structural recursion (term checking and type
    walks) so malformed, cyclic input fails with a type error instead of
    exhausting the interpreter stack.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LAMBDATYPE_",
        case_sensitive=False,
        extra="ignore",
    )

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)
    trace: bool = Field(default=False)


def load_settings(**overrides: Any) -> CheckerSettings:
    """Load settings from the environment, with explicit overrides on top."""
    return CheckerSettings(**overrides)

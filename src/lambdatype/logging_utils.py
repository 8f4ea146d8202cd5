"""Logging helpers.

The library only emits through loguru's ``logger``; applications call
:func:`configure_logging` once to install a sink.
"""

from __future__ import annotations

import inspect
import logging
import os
import sys

from loguru import logger

_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {message}"
_CONFIGURED = False


class InterceptHandler(logging.Handler):
    """Handler that forwards stdlib logging messages to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame:
            filename = frame.f_code.co_filename
            is_logging = filename == logging.__file__
            is_frozen = "importlib" in filename and "_bootstrap" in filename
            if depth > 0 and not (is_logging or is_frozen):
                break
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def parse_log_filter(value: str | None = None) -> tuple[str, dict[str | None, str | bool]]:
    """Parse a LAMBDATYPE_LOG_FILTER value.

    Format: "level" or "level,module=level,..."
    Examples:
        - "info" - global INFO level
        - "info,lambdatype.core=debug" - global INFO, lambdatype.core at DEBUG
        - "info,lambdatype.core=false" - global INFO, lambdatype.core disabled

    Returns:
        (global_level, module_filter_dict)
    """
    if value is None:
        value = os.getenv("LAMBDATYPE_LOG_FILTER", "info")
    parts = [p.strip() for p in value.lower().split(",") if p.strip()]

    filter_dict: dict[str | None, str | bool] = {}
    global_level = "info"

    for part in parts:
        if "=" in part:
            module, level = part.split("=", 1)
            module = module.strip()
            level = level.strip()
            if level == "false":
                filter_dict[module] = False
            else:
                filter_dict[module] = level.upper()
        else:
            global_level = part

    # Modules without an explicit entry fall back to the global level
    filter_dict.setdefault("", global_level.upper())
    return global_level, filter_dict


def configure_logging(force: bool = False) -> None:
    """Configure process-level logging once."""
    global _CONFIGURED
    if _CONFIGURED and not force:
        return

    _, module_filter = parse_log_filter()

    logger.remove()
    logger.add(
        sys.stderr,
        level=0,
        format=_FORMAT,
        backtrace=False,
        diagnose=False,
        filter=module_filter,
    )
    root_logger = logging.getLogger()
    if not any(isinstance(h, InterceptHandler) for h in root_logger.handlers):
        root_logger.addHandler(InterceptHandler())

    _CONFIGURED = True

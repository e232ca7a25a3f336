"""Logging for respawn.

Every module logs through ``get_logger`` under the ``respawn`` namespace.
Nothing is emitted until an application calls ``setup_logging`` or
``setup_logging_from_config``; a library caller that never does keeps
respawn silent.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_configured = False


def _resolve_level(level: int | str) -> int:
    """Turn a level name such as ``"warning"`` into its numeric value."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def setup_logging(level: int | str = logging.INFO, log_file: str | None = None) -> None:
    """Attach one handler to the ``respawn`` logger.

    Only the first call has an effect.

    Args:
        level: Level number or name (default: INFO).
        log_file: Path to a log file. If None, logs go to stderr.
    """
    global _configured
    if _configured:
        return

    numeric_level = _resolve_level(level)
    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger("respawn")
    root_logger.setLevel(numeric_level)
    root_logger.addHandler(handler)
    _configured = True


def setup_logging_from_config(
    log_cfg: dict, *, verbose: bool = False, log_file: str | None = None
) -> None:
    """Configure logging from the ``logging`` config section.

    Args:
        log_cfg: Section with ``level`` and ``file`` keys.
        verbose: Force DEBUG regardless of the configured level.
        log_file: Overrides ``log_cfg["file"]`` when given.
    """
    level = logging.DEBUG if verbose else log_cfg.get("level", "INFO")
    setup_logging(level=level, log_file=log_file or log_cfg.get("file"))


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the respawn namespace, e.g. ``"platform.spawner"``."""
    return logging.getLogger(f"respawn.{name}")

"""Runtime configuration.

Defaults live in module constants; :class:`Settings` lets scripts override
them through ``PYSKIP_*`` environment variables.
"""
from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

__all__ = ["MAX_LEVEL", "Settings", "configure_logging"]

MAX_LEVEL = 20  # Ample for ~1M elements with the p=0.5 level shape.
_DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    max_level: int = MAX_LEVEL
    seed: int = 0  # initial level-generator counter
    log_level: str = "WARNING"
    log_format: str = _DEFAULT_LOG_FORMAT
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        if self.max_level < 1:
            raise ValueError(f"max_level must be >= 1, got {self.max_level}")
        if self.seed < 0:
            raise ValueError(f"seed must be >= 0, got {self.seed}")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``PYSKIP_*`` variables (``os.environ`` by default)."""
        env = os.environ if env is None else env
        return cls(
            max_level=_int_env(env, "PYSKIP_MAX_LEVEL", MAX_LEVEL),
            seed=_int_env(env, "PYSKIP_SEED", 0),
            log_level=env.get("PYSKIP_LOG_LEVEL", "WARNING").upper(),
            log_format=env.get("PYSKIP_LOG_FORMAT", _DEFAULT_LOG_FORMAT),
            log_file=env.get("PYSKIP_LOG_FILE") or None,
        )


def configure_logging(settings: Settings) -> logging.Logger:
    """Attach console (and optional file) handlers to the ``pyskip`` logger."""
    numeric_level = getattr(logging, settings.log_level, logging.WARNING)
    formatter = logging.Formatter(settings.log_format)

    root_logger = logging.getLogger("pyskip")
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(numeric_level)
    root_logger.addHandler(console_handler)

    if settings.log_file:
        try:
            file_handler = logging.FileHandler(settings.log_file)
        except OSError as e:
            root_logger.warning("Failed to open log file %s: %s", settings.log_file, e)
        else:
            file_handler.setFormatter(formatter)
            file_handler.setLevel(numeric_level)
            root_logger.addHandler(file_handler)
    return root_logger

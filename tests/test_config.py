"""Unit tests for settings and logging setup."""
import logging

import pytest

from pyskip import MAX_LEVEL, Settings, SkipList
from pyskip.config import configure_logging


def test_defaults():
    """Without environment overrides the module constants apply."""
    settings = Settings.from_env({})
    assert settings.max_level == MAX_LEVEL == 20
    assert settings.seed == 0
    assert settings.log_level == "WARNING"
    assert settings.log_file is None


def test_from_env():
    """PYSKIP_* variables override the defaults."""
    settings = Settings.from_env(
        {"PYSKIP_MAX_LEVEL": "6", "PYSKIP_SEED": "3", "PYSKIP_LOG_LEVEL": "debug"}
    )
    assert settings.max_level == 6
    assert settings.seed == 3
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "env",
    [{"PYSKIP_MAX_LEVEL": "many"}, {"PYSKIP_MAX_LEVEL": "0"}, {"PYSKIP_SEED": "-2"}],
)
def test_invalid_env(env):
    """Bad values are rejected up front."""
    with pytest.raises(ValueError):
        Settings.from_env(env)


def test_from_settings():
    """SkipList.from_settings applies ceiling and seed."""
    sl = SkipList.from_settings(Settings(max_level=4, seed=7))
    sl.insert(1, 1)  # counter 7 -> level 4
    assert sl.max_level == 4
    assert sl.level == 4


def test_configure_logging(tmp_path):
    """Handlers are attached to the package logger and replaced on reconfigure."""
    log_file = tmp_path / "pyskip.log"
    settings = Settings(log_level="DEBUG", log_file=str(log_file))
    logger = configure_logging(settings)
    try:
        assert logger.name == "pyskip"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2

        sl = SkipList(seed=1)
        sl.insert(1, 1)
        for handler in logger.handlers:
            handler.flush()
        assert "grew from 1 to 2 levels" in log_file.read_text()

        configure_logging(Settings())
        assert len(logger.handlers) == 1
    finally:
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)

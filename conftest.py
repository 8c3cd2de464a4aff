"""Shared pytest fixtures and configuration for all tests."""

import logging

import pytest


SAMPLE_CONFIG = """Bind ctrl+q Quit
Grid 10 10 2
SetServer Development
"""


@pytest.fixture(autouse=True)
def reset_partman_logger():
    """Undo handler changes made by the CLI so caplog keeps working."""
    yield
    logger = logging.getLogger("partman")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def clean_partman_env(monkeypatch, tmp_path):
    """Keep PARTMAN_* variables and stray .env files out of tests."""
    for name in (
        "PARTMAN_CONFIG",
        "PARTMAN_LOG_LEVEL",
        "PARTMAN_FALLBACK_TO_DEFAULT",
        "PARTMAN_PRODUCTION_URL",
        "PARTMAN_VERBOSE",
        "PARTMAN_DEBUG",
        "PARTMAN_RERAISE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def sample_config_text():
    """The end-to-end example configuration."""
    return SAMPLE_CONFIG


@pytest.fixture
def write_config(tmp_path):
    """Write configuration text to a file and return its path."""

    def _write(text, name="partman.conf"):
        path = tmp_path / name
        path.write_bytes(text.encode("utf-8") if isinstance(text, str) else text)
        return path

    return _write

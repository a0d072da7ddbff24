"""Shared fixtures for the tsdb-ingest tests."""

import logging
import os

import pytest
import structlog

from tsdb_ingest.core.storage import MetricStore

@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Run in an empty directory with no TSDB_INGEST_ variables set."""
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("TSDB_INGEST_"):
            monkeypatch.delenv(name)
    return tmp_path

@pytest.fixture
def memory_store():
    """In-memory metric store, closed after the test."""
    store = MetricStore(":memory:")
    yield store
    store.close()

@pytest.fixture(autouse=True)
def restore_logging():
    """Undo handler changes made by setup_logging."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()

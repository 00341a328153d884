"""Shared test fixtures for ideathread."""

import os
import tempfile
from datetime import datetime, timedelta, timezone

import pytest

from ideathread.core.storage import LocalDocumentStore
from ideathread.threads.store_adapter import DocumentStoreAdapter


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta) -> datetime:
        self.now += timedelta(**delta)
        return self.now


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "paths": {"data_dir": os.path.join(tmp_dir, "data")},
        "storage": {"backend": "local", "root": os.path.join(tmp_dir, "docs")},
        "ideas": {"root": ".ideas", "timezone": "UTC"},
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(tmp_path):
    return LocalDocumentStore(base_path=str(tmp_path / "docs"))


@pytest.fixture
def adapter(store, clock):
    return DocumentStoreAdapter(store, clock=clock, tz=timezone.utc)

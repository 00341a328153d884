"""Shared setup logic for CLI commands."""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from ideathread.core.config import Config
from ideathread.core.exceptions import ConfigurationError, IdeaThreadError
from ideathread.core.storage import StorageError

if TYPE_CHECKING:
    from ideathread.threads.adapter import IdeaStorageAdapter
    from ideathread.threads.service import IdeaService

IDEATHREAD_DIR = Path.home() / ".ideathread"
CONFIG_PATH = IDEATHREAD_DIR / "config.yaml"


def load_config(config_file: str | None = None, root: str | None = None) -> Config:
    """Load config from the given file (default ~/.ideathread/config.yaml)."""
    config = Config(config_file=config_file or str(CONFIG_PATH))
    if root:
        config.set("storage.root", root)
    return config


def _build_local_adapter(config: Config) -> IdeaStorageAdapter:
    from ideathread.core.storage import LocalDocumentStore
    from ideathread.threads.store_adapter import DocumentStoreAdapter

    store = LocalDocumentStore(base_path=config.get("storage.root"))
    return DocumentStoreAdapter(store, ideas_root=config.get("ideas.root", ".ideas"), tz=config.get_timezone())


ADAPTER_FACTORIES: dict[str, Callable[[Config], IdeaStorageAdapter]] = {
    "local": _build_local_adapter,
}


def build_adapter(config: Config) -> IdeaStorageAdapter:
    """Pick the storage adapter named by ``storage.backend``."""
    backend = str(config.get("storage.backend", "local")).strip().lower()
    factory = ADAPTER_FACTORIES.get(backend)
    if factory is None:
        known = ", ".join(sorted(ADAPTER_FACTORIES))
        raise ConfigurationError(f"Unknown storage backend '{backend}'. Available: {known}")
    return factory(config)


class AppContext:
    """Per-invocation state: the config, and a service built on first use."""

    def __init__(self, config: Config):
        self.config = config
        self._service: IdeaService | None = None

    @property
    def service(self) -> IdeaService:
        if self._service is None:
            from ideathread.threads.service import IdeaService

            self._service = IdeaService(build_adapter(self.config), tz=self.config.get_timezone())
        return self._service


pass_app = click.make_pass_decorator(AppContext)


def run_command(coro_fn: Callable[..., Any]) -> Callable[..., Any]:
    """Run an async command body with asyncio and turn library errors into CLI errors."""

    @functools.wraps(coro_fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return asyncio.run(coro_fn(*args, **kwargs))
        except (IdeaThreadError, StorageError) as e:
            raise click.ClickException(str(e)) from e

    return wrapper

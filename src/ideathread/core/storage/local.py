"""
Local filesystem document store.

Documents are plain UTF-8 files below ``base_path``; folders are directories.
"""

import os
from datetime import datetime
from pathlib import Path

import aiofiles
import aiofiles.os
from loguru import logger

from .base import DocInfo, DocumentStore, StorageKeyError, StoragePermissionError


class LocalDocumentStore(DocumentStore):
    """Local filesystem document store."""

    def __init__(self, base_path: str = "~/.ideathread-data/docs", suffix: str = ".md", **config):
        super().__init__(**config)
        self.base_path = Path(base_path).expanduser().resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)
        self.suffix = suffix

    def _get_full_path(self, rel_path: str, allow_root: bool = False) -> Path:
        """Resolve a relative path to an absolute path under ``base_path``.

        Rejects unsafe paths (absolute paths, traversal, empty paths, and
        backslash-delimited paths) to prevent writes outside ``base_path``.
        """
        raw = rel_path.strip().strip("/")
        if not raw:
            if allow_root:
                return self.base_path
            raise StoragePermissionError("Document path cannot be empty.")
        if "\x00" in raw:
            raise StoragePermissionError("Document path cannot contain null bytes.")
        if "\\" in raw:
            raise StoragePermissionError("Document path cannot contain backslashes. Use '/' separators.")
        if rel_path.strip().startswith(("/", "~")):
            raise StoragePermissionError(f"Unsafe document path '{rel_path}': absolute paths are not allowed.")

        full_path = (self.base_path / raw).resolve()
        try:
            full_path.relative_to(self.base_path)
        except ValueError as e:
            raise StoragePermissionError(f"Unsafe document path '{rel_path}': path traversal is not allowed.") from e
        return full_path

    def _rel(self, path: Path) -> str:
        return path.relative_to(self.base_path).as_posix()

    async def _info(self, path: Path) -> DocInfo:
        stat = await aiofiles.os.stat(path)
        return DocInfo(
            rel_path=self._rel(path),
            created_at=datetime.fromtimestamp(stat.st_ctime),
            updated_at=datetime.fromtimestamp(stat.st_mtime),
        )

    async def create_folder(self, path: str) -> None:
        folder = self._get_full_path(path, allow_root=True)
        if folder.exists() and not folder.is_dir():
            raise StoragePermissionError(f"Cannot create folder over a document: {path}")
        await aiofiles.os.makedirs(folder, exist_ok=True)

    async def list_docs(self, folder: str, recursive: bool = True) -> list[DocInfo]:
        root = self._get_full_path(folder, allow_root=True)
        if not root.is_dir():
            return []

        paths: list[Path] = []
        if recursive:
            for dirpath, dirnames, files in os.walk(root):
                dirnames.sort()
                paths.extend(Path(dirpath) / name for name in sorted(files) if name.endswith(self.suffix))
        else:
            paths = sorted(p for p in root.iterdir() if p.is_file() and p.name.endswith(self.suffix))

        return [await self._info(p) for p in paths]

    async def create_doc(self, folder: str, name: str) -> DocInfo:
        if not name or "/" in name:
            raise StoragePermissionError(f"Invalid document name: {name!r}")
        path = self._get_full_path(f"{folder.rstrip('/')}/{name}" if folder.strip("/") else name)
        path.parent.mkdir(parents=True, exist_ok=True)
        if not path.exists():
            try:
                async with aiofiles.open(path, "w", encoding="utf-8") as f:
                    await f.write("")
            except PermissionError as e:
                raise StoragePermissionError(f"Cannot create {path}: {e}") from e
        return await self._info(path)

    async def get_doc_content(self, rel_path: str) -> str:
        path = self._get_full_path(rel_path)
        if not path.is_file():
            raise StorageKeyError(f"Document not found: {rel_path}")
        try:
            async with aiofiles.open(path, encoding="utf-8", newline="") as f:
                return await f.read()
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot read {path}: {e}") from e

    async def save_doc_content(self, rel_path: str, content: str) -> None:
        path = self._get_full_path(rel_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            async with aiofiles.open(path, "w", encoding="utf-8", newline="") as f:
                await f.write(content)
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot write to {path}: {e}") from e
        logger.debug(f"Saved {rel_path} ({len(content)} chars)")

    async def remove_doc(self, rel_path: str) -> bool:
        path = self._get_full_path(rel_path)
        if not path.is_file():
            return False
        await aiofiles.os.remove(path)
        return True

    async def rename_doc(self, rel_path: str, new_name: str) -> DocInfo:
        if not new_name or "/" in new_name:
            raise StoragePermissionError(f"Invalid document name: {new_name!r}")
        source = self._get_full_path(rel_path)
        if not source.is_file():
            raise StorageKeyError(f"Document not found: {rel_path}")
        dest = self._get_full_path(self._rel(source.parent / new_name))
        if dest.exists() and dest != source:
            raise StoragePermissionError(f"Document already exists: {self._rel(dest)}")
        await aiofiles.os.rename(source, dest)
        return await self._info(dest)

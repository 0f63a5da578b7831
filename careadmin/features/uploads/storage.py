"""
Upload Storage Module

This module provides the storage sink used by the upload acceptor and its
local-disk implementation.

Features:
- Storage abstraction
- Lazy directory creation
- Disk writes off the event loop
- File listing
- File removal

Data Model:
- Root directory
- One flat directory per category

Dependencies:
- shutil for streamed copies
- asyncio executor for blocking writes
- pathlib for paths
- logging for tracking

Author: Care Admin Development Team
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, List, Set
import asyncio
import logging
import shutil

from .constants import CHUNK_SIZE
from .models import StoredFile

logger = logging.getLogger(__name__)


class StorageSink(ABC):
    """Abstract base class for upload storage backends."""

    @abstractmethod
    def directory_for(self, category: str) -> str:
        """Return the location files of a category are stored in."""

    @abstractmethod
    async def save(self, category: str, filename: str, data: BinaryIO) -> int:
        """
        Persist one file.

        Args:
            category: Upload category
            filename: Assigned storage name
            data: File-like object positioned at the start of the content

        Returns:
            int: Number of bytes written
        """

    @abstractmethod
    def list_files(self, category: str) -> List[StoredFile]:
        """List stored files of a category, oldest first."""

    @abstractmethod
    def delete(self, category: str, filename: str) -> None:
        """Remove one stored file."""


class LocalDiskStorage(StorageSink):
    """
    Stores uploads on the local filesystem.

    Category directories are created on first use and remembered, so later
    uploads skip the filesystem check.

    Attributes:
        root (Path): Base uploads directory
        chunk_size (int): Bytes copied per write
    """

    def __init__(self, root: Path, chunk_size: int = CHUNK_SIZE):
        self.root = Path(root)
        self.chunk_size = chunk_size
        self._prepared: Set[str] = set()

    def directory_for(self, category: str) -> str:
        return str(self.root / category)

    def ensure_directory(self, category: str) -> Path:
        """
        Create the category directory once per process.

        Notes:
            - Creates parents
            - exist_ok keeps concurrent creation safe
        """
        directory = self.root / category
        if category not in self._prepared:
            directory.mkdir(parents=True, exist_ok=True)
            self._prepared.add(category)
            logger.info(f"Upload directory ready: {directory}")
        return directory

    def prepare(self, categories) -> None:
        for category in categories:
            self.ensure_directory(category)

    def _write(self, target: Path, data: BinaryIO) -> int:
        with open(target, "wb") as buffer:
            shutil.copyfileobj(data, buffer, self.chunk_size)
            return buffer.tell()

    async def save(self, category: str, filename: str, data: BinaryIO) -> int:
        target = self.ensure_directory(category) / filename
        loop = asyncio.get_running_loop()
        try:
            written = await loop.run_in_executor(None, lambda: self._write(target, data))
        except Exception:
            # Leave no partial file behind.
            target.unlink(missing_ok=True)
            raise
        logger.info(f"Stored {written} bytes at {target}")
        return written

    def list_files(self, category: str) -> List[StoredFile]:
        directory = self.root / category
        if not directory.is_dir():
            return []
        files = []
        for path in directory.iterdir():
            if not path.is_file():
                continue
            stats = path.stat()
            files.append(
                StoredFile(
                    name=path.name,
                    size=stats.st_size,
                    modified=datetime.fromtimestamp(stats.st_mtime, tz=timezone.utc),
                )
            )
        return sorted(files, key=lambda f: (f.modified, f.name))

    def delete(self, category: str, filename: str) -> None:
        (self.root / category / filename).unlink()
        logger.info(f"Deleted {category}/{filename}")

"""Offline source reading a vulnerability database from a local directory."""

import asyncio
from pathlib import Path
from typing import Union

from ..errors import ConfigurationError, SourceError, SourceNotFoundError
from ..utils.logging import get_logger
from .base import Source


class OfflineSource(Source):
    """Source for a database laid out on disk.

    The directory mirrors the served layout: ``index/modules.json``,
    ``index/vulns.json`` and ``ID/<id>.json``.
    """

    def __init__(self, database_path: Union[str, Path]) -> None:
        """Initialize the offline source.

        Args:
            database_path: Root directory of the database

        Raises:
            ConfigurationError: If the directory does not exist
        """
        self.database_path = Path(database_path)
        if not self.database_path.is_dir():
            raise ConfigurationError(f"Database path does not exist: {self.database_path}")
        self._root = self.database_path.resolve()
        self.logger = get_logger("OfflineSource")

    async def get(self, key: str) -> bytes:
        path = (self._root / key).resolve()
        if self._root not in path.parents:
            raise SourceError("get", key, ValueError("key escapes the database directory"))

        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, path.read_bytes)
        except FileNotFoundError as e:
            raise SourceNotFoundError("get", key, e) from e
        except OSError as e:
            self.logger.debug(f"Reading {path} failed: {e}")
            raise SourceError("get", key, e) from e

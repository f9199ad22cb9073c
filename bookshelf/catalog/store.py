"""
File-backed persistence for the catalog.

The whole catalog lives in one JSON document of the form
``{"books": [...]}``. It is read fully on every request and rewritten
fully on every mutation; there is no partial update. ``CatalogStore``
is the interface the service depends on, so tests can hand it an
in-memory implementation instead of a real file.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Union

import aiofiles

from .errors import CorruptStoreError, PersistenceError

logger = logging.getLogger(__name__)

# Written verbatim when the backing document is missing
EMPTY_CATALOG_TEXT = '{"books":[]}'


class CatalogStore(ABC):
    """Owner of the persisted catalog document."""

    @abstractmethod
    async def load(self) -> Dict[str, Any]:
        """Return the decoded catalog, creating an empty one if absent."""

    @abstractmethod
    async def save(self, catalog: Dict[str, Any]) -> None:
        """Overwrite the persisted catalog with ``catalog``."""


class JsonFileCatalogStore(CatalogStore):
    """Catalog stored as a single UTF-8 JSON file.

    Parameters
    ----------
    path : str or Path
        Location of the document. The parent directory is created on
        first write if it does not exist.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    async def load(self) -> Dict[str, Any]:
        try:
            text = await self._read_text()
        except FileNotFoundError:
            logger.warning("Catalog file not found, initializing: %s", self.path)
            await self._write_text(EMPTY_CATALOG_TEXT)
            text = await self._read_text_or_fail()
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to read catalog file %s: %s", self.path, exc)
            raise CorruptStoreError(f"Cannot read catalog file: {self.path}") from exc

        return self._decode(text)

    async def save(self, catalog: Dict[str, Any]) -> None:
        text = json.dumps(catalog, indent=2, ensure_ascii=False)
        await self._write_text(text)
        logger.info("Catalog saved: %s (%d books)", self.path, len(catalog.get("books") or []))

    # ----------------------------
    # Internals
    # ----------------------------

    async def _read_text(self) -> str:
        async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
            return await f.read()

    async def _read_text_or_fail(self) -> str:
        try:
            return await self._read_text()
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to re-read initialized catalog %s: %s", self.path, exc)
            raise CorruptStoreError(f"Cannot read catalog file: {self.path}") from exc

    async def _write_text(self, text: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
                await f.write(text)
        except OSError as exc:
            logger.error("Failed to write catalog file %s: %s", self.path, exc)
            raise PersistenceError(f"Cannot write catalog file: {self.path}") from exc

    def _decode(self, text: str) -> Dict[str, Any]:
        try:
            data = json.loads(text)
        except ValueError as exc:
            logger.error("Catalog file is not valid JSON %s: %s", self.path, exc)
            raise CorruptStoreError(f"Catalog file is not valid JSON: {self.path}") from exc

        if not isinstance(data, dict):
            logger.error(
                "Catalog file top level is %s, expected object: %s",
                type(data).__name__,
                self.path,
            )
            raise CorruptStoreError(f"Catalog file is not a JSON object: {self.path}")
        return data

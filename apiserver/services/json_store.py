"""
jsau-apiserver — JSON File Record Store
========================================

What:  RecordStore backed by a single file holding a JSON array.
Why:   recettes.json and favorites.json are plain files edited by hand and by
       the API; this is the only module that reads or writes them.
How:   Async file I/O (aiofiles) so a slow disk never blocks the event loop.
       Every load reads and parses the whole file; every save rewrites it.

Write strategy:
    The new array is written to a hidden temporary file next to the target,
    then renamed over it. The rename is atomic on POSIX file systems, so a
    concurrent reader sees either the old array or the new one, never a
    truncated file.

    favorites.json
    .favorites.json.<hex>.tmp   (exists only during save)

Strict parsing:
    NaN, Infinity and numbers overflowing a float are not JSON; they are
    rejected at load time like any other syntax error.
"""

import json
import logging
import math
import uuid
from pathlib import Path
from typing import Any, List, Union

import aiofiles
import aiofiles.os

from apiserver.exceptions import StoreCorruptError, StoreError, StoreMissingError
from apiserver.services.store_base import RecordStore

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON value")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"number out of range: {text}")
    return value


class JsonFileStore(RecordStore):
    """
    Loads and saves a JSON array of records from one file.

    The file is never created implicitly: load() on a missing file raises
    StoreMissingError and callers decide whether that means "empty".
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.location = str(self.path)

    async def exists(self) -> bool:
        return await aiofiles.os.path.isfile(self.path)

    async def load(self) -> List[Any]:
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                raw = await f.read()
        except FileNotFoundError:
            raise StoreMissingError(self.location)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read %s: %s", self.location, str(e))
            raise StoreError(self.location, str(e)) from e

        try:
            data = json.loads(
                raw, parse_constant=_reject_constant, parse_float=_parse_finite_float
            )
        except ValueError as e:
            raise StoreCorruptError(self.location, f"invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise StoreCorruptError(
                self.location, f"expected a JSON array, got {type(data).__name__}"
            )

        logger.debug("Loaded %d records from %s", len(data), self.location)
        return data

    async def save(self, records: List[Any]) -> None:
        # Same layout as the files maintained by hand: 2-space indent, UTF-8
        payload = json.dumps(records, indent=2, ensure_ascii=False)
        tmp_path = self.path.with_name(f".{self.path.name}.{uuid.uuid4().hex}.tmp")

        try:
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(payload)
            await aiofiles.os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("Failed to write %s: %s", self.location, str(e))
            await self._discard(tmp_path)
            raise StoreError(self.location, str(e)) from e

        logger.debug("Saved %d records to %s", len(records), self.location)

    async def _discard(self, tmp_path: Path) -> None:
        """Best-effort removal of a temporary file left by a failed save."""
        try:
            if await aiofiles.os.path.exists(tmp_path):
                await aiofiles.os.remove(tmp_path)
        except OSError as e:
            logger.warning("Failed to clean up %s: %s", tmp_path, str(e))

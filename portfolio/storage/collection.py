# File: portfolio/storage/collection.py
"""
Collection store: owns the JSON file holding every project record.

The file is a JSON array, read and rewritten as a whole on each append.
Writes go to a temp file next to the live one and are renamed into place,
so a concurrent reader sees either the old or the new document. Appends
are serialized with an asyncio.Lock; one store instance per process.
"""

import asyncio
import json
import uuid
from pathlib import Path
from typing import Any, List

import aiofiles
import aiofiles.os
from pydantic import TypeAdapter, ValidationError as SchemaError

from portfolio.core.errors import CollectionCorruptError, DuplicateIdError, StorageIOError
from portfolio.core.logging import get_logger
from portfolio.schemas.project import Project

logger = get_logger(__name__)

_project_list = TypeAdapter(List[Project])


async def write_json_atomic(path: Path, document: Any) -> None:
    """
    Write `document` as indented JSON to `path` via temp file + rename.

    Raises:
        StorageIOError: if the temp file cannot be written or renamed.
    """
    path = Path(path)
    tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex[:8]}.tmp")
    payload = json.dumps(document, indent=2, ensure_ascii=False)
    try:
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(payload)
        await aiofiles.os.replace(tmp_path, path)
    except OSError as e:
        try:
            await aiofiles.os.remove(tmp_path)
        except OSError:
            pass
        raise StorageIOError(f"Failed to write {path}: {e}") from e


class CollectionStore:
    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = asyncio.Lock()

    async def read(self) -> List[Project]:
        """
        Strict read of the whole collection.

        A missing file is an empty collection (first run). Anything that
        is not a JSON array of valid project records raises
        CollectionCorruptError.
        """
        try:
            async with aiofiles.open(self.path, "rb") as f:
                raw = await f.read()
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageIOError(f"Failed to read {self.path}: {e}") from e

        try:
            return _project_list.validate_python(json.loads(raw.decode("utf-8")))
        except (UnicodeDecodeError, json.JSONDecodeError, SchemaError) as e:
            raise CollectionCorruptError(f"Collection file {self.path} is not a valid project list: {e}") from e

    async def list(self) -> List[Project]:
        """
        All records in append order.

        Returns [] when the file does not exist yet, or when it cannot be
        parsed. A parse failure is logged and the file is left as is.
        """
        if not await aiofiles.os.path.exists(self.path):
            logger.debug(f"[STORE] No collection file at {self.path} yet")
            return []
        try:
            return await self.read()
        except CollectionCorruptError as e:
            logger.error(f"[STORE] {e}")
            return []

    async def append(self, record: Project) -> None:
        """
        Add `record` to the end of the collection.

        Raises:
            DuplicateIdError: a record with the same id is already stored.
            CollectionCorruptError: the existing file is unreadable; nothing
                is written so the existing content survives.
            StorageIOError: the file could not be written.
        """
        async with self._lock:
            projects = await self.read()
            if any(p.id == record.id for p in projects):
                raise DuplicateIdError(record.id)
            projects.append(record)
            await write_json_atomic(self.path, [p.to_document() for p in projects])
            logger.info(f"[STORE] Appended project {record.id} ({len(projects)} total)")

# File: portfolio/storage/bootstrap.py

from pathlib import Path

import aiofiles.os

from portfolio.core.errors import StorageIOError
from portfolio.core.logging import get_logger
from portfolio.storage.collection import write_json_atomic

logger = get_logger(__name__)


async def ensure_storage(blob_dir: Path, collection_file: Path) -> None:
    """
    Make sure the blob directory and the collection file exist.

    Missing directories are created with their parents. A missing
    collection file is created as an empty list; an existing one is never
    modified. Safe to call any number of times.

    Raises:
        StorageIOError: a path cannot be created (permissions, a file in
            the way of a directory, ...).
    """
    blob_dir = Path(blob_dir)
    collection_file = Path(collection_file)

    for directory in (blob_dir, collection_file.parent):
        try:
            await aiofiles.os.makedirs(directory, exist_ok=True)
        except OSError as e:
            raise StorageIOError(f"Cannot create directory {directory}: {e}") from e

    if await aiofiles.os.path.exists(collection_file):
        return

    await write_json_atomic(collection_file, [])
    logger.info(f"[BOOTSTRAP] Created empty collection at {collection_file}")

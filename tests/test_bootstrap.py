# File: tests/test_bootstrap.py

import asyncio
import json

import pytest

from portfolio.core.errors import StorageIOError
from portfolio.storage.bootstrap import ensure_storage
from portfolio.storage.collection import CollectionStore


def test_fresh_environment_gets_empty_collection(tmp_path):
    blob_dir = tmp_path / "public" / "projects"
    collection_file = tmp_path / "public" / "data" / "projects.json"

    asyncio.run(ensure_storage(blob_dir, collection_file))

    assert blob_dir.is_dir()
    assert json.loads(collection_file.read_text(encoding="utf-8")) == []
    assert asyncio.run(CollectionStore(collection_file).list()) == []


def test_ensure_storage_is_idempotent_and_keeps_existing_file(tmp_path):
    blob_dir = tmp_path / "projects"
    collection_file = tmp_path / "data" / "projects.json"
    collection_file.parent.mkdir(parents=True)
    collection_file.write_text('[{"not": "touched"}]', encoding="utf-8")

    asyncio.run(ensure_storage(blob_dir, collection_file))
    asyncio.run(ensure_storage(blob_dir, collection_file))

    assert collection_file.read_text(encoding="utf-8") == '[{"not": "touched"}]'
    assert blob_dir.is_dir()


def test_ensure_storage_fails_when_a_file_blocks_the_directory(tmp_path):
    blocker = tmp_path / "projects"
    blocker.write_text("I am a file", encoding="utf-8")

    with pytest.raises(StorageIOError):
        asyncio.run(ensure_storage(blocker / "images", tmp_path / "data" / "projects.json"))

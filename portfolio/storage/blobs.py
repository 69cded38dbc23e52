# File: portfolio/storage/blobs.py
"""
Blob writer: turns an inline image payload into a file named by project id.

Payloads arrive as data URLs ("data:image/png;base64,iVBOR...") from the
upload form. A bare base64 string without the header is accepted too.
"""

import base64
import binascii
import glob
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import aiofiles

from portfolio.core.errors import DuplicateIdError, PayloadError, PayloadTooLarge, StorageIOError
from portfolio.core.logging import get_logger

logger = get_logger(__name__)

DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[^,;]*)*;base64,", re.IGNORECASE)

MIME_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
}
DEFAULT_EXTENSION = "jpg"


@dataclass(frozen=True)
class BlobRef:
    path: Path
    url: str
    size: int


def split_payload(encoded_payload: str) -> Tuple[str, str]:
    """
    Split a data URL into (extension, base64 data).

    Unknown or missing MIME types map to DEFAULT_EXTENSION.
    """
    match = DATA_URL_RE.match(encoded_payload)
    if match is None:
        if encoded_payload.startswith("data:"):
            raise PayloadError("Image payload is not base64 encoded")
        return DEFAULT_EXTENSION, encoded_payload.strip()

    mime = (match.group("mime") or "").lower()
    return MIME_EXTENSIONS.get(mime, DEFAULT_EXTENSION), encoded_payload[match.end():].strip()


class BlobWriter:
    def __init__(self, blob_dir: Path, url_prefix: str = "/projects", max_bytes: Optional[int] = None):
        self.blob_dir = Path(blob_dir)
        self.url_prefix = "/" + url_prefix.strip("/")
        self.max_bytes = max_bytes

    def decode(self, encoded_payload: str) -> Tuple[str, bytes]:
        """
        Decode a payload into (extension, raw bytes) without touching disk.

        Raises:
            PayloadError: no data segment, invalid base64, or zero bytes.
            PayloadTooLarge: decoded size above max_bytes.
        """
        if not encoded_payload:
            raise PayloadError("Image payload is empty")

        extension, data = split_payload(encoded_payload)
        if not data:
            raise PayloadError("Image payload has no data segment")

        data = "".join(data.split())
        # base64 expands by 4/3; reject before decoding anything clearly too big
        if self.max_bytes is not None:
            estimated = len(data) * 3 // 4 - data.count("=")
            if estimated > self.max_bytes:
                raise PayloadTooLarge(estimated, self.max_bytes)

        try:
            raw = base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise PayloadError(f"Image payload is not valid base64: {e}") from e

        if not raw:
            raise PayloadError("Image payload decodes to zero bytes")
        if self.max_bytes is not None and len(raw) > self.max_bytes:
            raise PayloadTooLarge(len(raw), self.max_bytes)
        return extension, raw

    def filename_for(self, record_id: str, extension: str = DEFAULT_EXTENSION) -> str:
        return f"{record_id}.{extension}"

    def url_for(self, filename: str) -> str:
        return f"{self.url_prefix}/{filename}"

    def resolve(self, url: str) -> Path:
        """Map a public image URL (as stored on a record) to the blob path."""
        prefix = self.url_prefix + "/"
        if not url.startswith(prefix):
            raise ValueError(f"Not a blob URL: {url}")
        name = url[len(prefix):]
        if not name or "/" in name or name.startswith("."):
            raise ValueError(f"Not a blob URL: {url}")
        return self.blob_dir / name

    async def write(self, encoded_payload: str, record_id: str) -> BlobRef:
        """
        Decode `encoded_payload` and store it as <blob_dir>/<record_id>.<ext>.

        Nothing is written when decoding fails. An existing blob for the
        same id, under any extension, is never replaced.

        Raises:
            DuplicateIdError: a blob for `record_id` already exists.
        """
        extension, raw = self.decode(encoded_payload)
        if any(self.blob_dir.glob(f"{glob.escape(record_id)}.*")):
            raise DuplicateIdError(record_id)

        filename = self.filename_for(record_id, extension)
        path = self.blob_dir / filename
        try:
            async with aiofiles.open(path, "xb") as f:
                await f.write(raw)
        except FileExistsError as e:
            raise DuplicateIdError(record_id) from e
        except OSError as e:
            raise StorageIOError(f"Failed to write image {path}: {e}") from e

        logger.info(f"[BLOB] Saved {path} ({len(raw)} bytes)")
        return BlobRef(path=path, url=self.url_for(filename), size=len(raw))

    def find_orphans(self, known_ids: Iterable[str]) -> List[Path]:
        """
        Blob files whose id has no record in the collection.

        Report only; removing them is left to whoever runs maintenance.
        """
        if not self.blob_dir.exists():
            return []
        known = set(known_ids)
        return sorted(
            p for p in self.blob_dir.iterdir()
            if p.is_file() and not p.name.startswith(".") and p.stem not in known
        )

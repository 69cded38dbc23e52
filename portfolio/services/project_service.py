# File: portfolio/services/project_service.py
"""
Project submission service.

Takes the fields from the upload form plus the inline image, stores the
image, then appends the record to the collection. The image is always
written before the record that points at it.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Mapping, Optional

from portfolio.core.config import Settings
from portfolio.core.errors import PortfolioError, ValidationError
from portfolio.core.logging import get_logger
from portfolio.schemas.project import Project
from portfolio.services.ids import IdGenerator
from portfolio.storage.blobs import BlobWriter
from portfolio.storage.bootstrap import ensure_storage
from portfolio.storage.collection import CollectionStore

logger = get_logger(__name__)

REQUIRED_FIELDS = ("title", "description", "category")
OPTIONAL_FIELDS = ("github", "demo")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _optional(value: Optional[str]) -> Optional[str]:
    return None if _is_blank(value) else value


class ProjectService:
    def __init__(
        self,
        store: CollectionStore,
        blobs: BlobWriter,
        ids: Optional[IdGenerator] = None,
    ):
        self.store = store
        self.blobs = blobs
        self.ids = ids or IdGenerator()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProjectService":
        return cls(
            store=CollectionStore(settings.collection_file),
            blobs=BlobWriter(
                settings.blob_dir,
                url_prefix=settings.blob_url_prefix,
                max_bytes=settings.max_image_bytes,
            ),
        )

    async def bootstrap(self) -> None:
        await ensure_storage(self.blobs.blob_dir, self.store.path)

    def validate(self, fields: Mapping[str, Any], encoded_image: Optional[str]) -> None:
        for name in REQUIRED_FIELDS:
            value = fields.get(name)
            if _is_blank(value):
                raise ValidationError(name)
            if not isinstance(value, str):
                raise ValidationError(name, f"Field {name} must be text")
        for name in OPTIONAL_FIELDS:
            value = fields.get(name)
            if value is not None and not isinstance(value, str):
                raise ValidationError(name, f"Field {name} must be text")
        if _is_blank(encoded_image):
            raise ValidationError("image")
        if not isinstance(encoded_image, str):
            raise ValidationError("image", "Image payload must be text")

    async def submit(self, fields: Mapping[str, Any], encoded_image: Optional[str]) -> Project:
        """
        Validate a submission, store its image and append the new record.

        Args:
            fields: title, description, category, and optionally github / demo.
            encoded_image: data URL or bare base64 of the project image.

        Returns:
            The stored Project.

        Raises:
            ValidationError: a required field is missing; nothing is written.
            PayloadError / PayloadTooLarge: bad image; nothing is written.
            DuplicateIdError, StorageIOError: storing failed. If the image
                was already written it stays on disk as an orphan.
        """
        self.validate(fields, encoded_image)

        project_id = self.ids.next()
        blob = await self.blobs.write(encoded_image, project_id)

        project = Project(
            id=project_id,
            title=fields["title"],
            description=fields["description"],
            category=fields["category"],
            image=blob.url,
            github=_optional(fields.get("github")),
            demo=_optional(fields.get("demo")),
            created_at=datetime.now(timezone.utc),
        )

        try:
            await self.store.append(project)
        except PortfolioError as e:
            logger.error(f"[SUBMIT] Append failed for {project_id}, image left orphaned at {blob.path}: {e}")
            raise

        logger.info(f"[SUBMIT] Created project {project_id} ({project.category}): {project.title}")
        return project

    async def list_projects(self) -> List[Project]:
        return await self.store.list()

    def image_path(self, project: Project) -> Path:
        return self.blobs.resolve(project.image)

    async def orphaned_images(self) -> List[Path]:
        """Image files with no matching record. Nothing is deleted."""
        projects = await self.store.read()
        return self.blobs.find_orphans(p.id for p in projects)

# File: portfolio/schemas/project.py

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Project(BaseModel):
    """
    A single project record as stored in the collection file.

    github / demo are None when not provided and are left out of the
    serialized document entirely.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str
    category: str
    image: str
    github: Optional[str] = None
    demo: Optional[str] = None
    created_at: datetime = Field(alias="createdAt")

    def to_document(self) -> Dict[str, Any]:
        """JSON-ready dict with the on-disk key names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ProjectCreate(BaseModel):
    """
    Submission body for POST /projects.

    Every field is Optional here; ProjectService.submit checks the
    required ones and reports the missing field by name.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    github: Optional[str] = None
    demo: Optional[str] = None
    image_base64: Optional[str] = Field(default=None, alias="imageBase64")

    @field_validator("github", "demo")
    @classmethod
    def blank_to_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v

    def fields(self) -> Dict[str, Optional[str]]:
        return self.model_dump(exclude={"image_base64"})

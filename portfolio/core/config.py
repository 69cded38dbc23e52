# File: portfolio/core/config.py

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, AnyHttpUrl, field_validator, model_validator


def _env_path(name: str) -> Optional[Path]:
    value = os.getenv(name)
    return Path(value) if value else None


class Settings(BaseModel):
    PROJECT_NAME: str = "Portfolio API"
    VERSION: str = "0.1.0"

    api_v1_prefix: str = "/api/v1"
    log_level: str = os.getenv("PORTFOLIO_LOG_LEVEL", "INFO")

    # CORS
    backend_cors_origins: List[AnyHttpUrl] = []

    # Storage. blob_dir and collection_file default to locations under
    # storage_root, mirroring the site's public/ folder.
    storage_root: Path = Path(os.getenv("PORTFOLIO_STORAGE_ROOT", "public"))
    blob_dir: Optional[Path] = _env_path("PORTFOLIO_BLOB_DIR")
    collection_file: Optional[Path] = _env_path("PORTFOLIO_COLLECTION_FILE")
    blob_url_prefix: str = "/projects"

    max_image_bytes: int = int(os.getenv("PORTFOLIO_MAX_IMAGE_BYTES", 5 * 1024 * 1024))  # 5MB

    @field_validator("backend_cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return v
        return []

    @field_validator("blob_url_prefix")
    @classmethod
    def normalize_url_prefix(cls, v: str) -> str:
        return "/" + v.strip("/")

    @model_validator(mode="after")
    def derive_storage_paths(self):
        if self.blob_dir is None:
            self.blob_dir = self.storage_root / "projects"
        if self.collection_file is None:
            self.collection_file = self.storage_root / "data" / "projects.json"
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings(
        backend_cors_origins=os.getenv("PORTFOLIO_CORS_ORIGINS", ""),
    )


settings = get_settings()

# File: portfolio/api/v1/routes_project.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from portfolio.api.deps import get_project_service
from portfolio.core.errors import (
    DuplicateIdError,
    PayloadError,
    PayloadTooLarge,
    StorageIOError,
    ValidationError,
)
from portfolio.schemas.project import Project, ProjectCreate
from portfolio.services.project_service import ProjectService

router = APIRouter()


@router.get(
    "/",
    response_model=List[Project],
    response_model_by_alias=True,
    response_model_exclude_none=True,
    summary="List projects",
)
async def list_projects(service: ProjectService = Depends(get_project_service)):
    """
    Return every stored project, oldest first.

    An empty list means nothing has been uploaded yet; the page shows its
    sample projects in that case.
    """
    return await service.list_projects()


@router.post(
    "/",
    response_model=Project,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
)
async def create_project(
    payload: ProjectCreate,
    service: ProjectService = Depends(get_project_service),
):
    """
    Store an uploaded project.

    Request JSON:
    {
      "title": "Nav Robot",
      "description": "...",
      "category": "robotics",
      "github": "optional",
      "demo": "optional",
      "imageBase64": "data:image/jpeg;base64,..."
    }
    """
    try:
        project = await service.submit(payload.fields(), payload.image_base64)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PayloadTooLarge as e:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=str(e))
    except PayloadError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateIdError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except StorageIOError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to store project: {e}",
        )

    return project

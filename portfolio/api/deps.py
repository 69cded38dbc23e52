# File: portfolio/api/deps.py

from fastapi import Request

from portfolio.services.project_service import ProjectService


def get_project_service(request: Request) -> ProjectService:
    """
    FastAPI dependency returning the process-wide ProjectService.

    The service (and with it the collection store and its lock) is created
    once in the application lifespan and kept on app.state.

    Usage in route functions:
        service: ProjectService = Depends(get_project_service)
    """
    return request.app.state.project_service

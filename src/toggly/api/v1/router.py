from fastapi import APIRouter

from src.toggly.api.v1 import environments, projects


def build_api_router(base_path: str) -> APIRouter:
    """Versioned API router mounted under the configured base path."""
    api_router = APIRouter(prefix=f"{base_path}/v1")
    api_router.include_router(projects.router)
    api_router.include_router(environments.router)
    return api_router

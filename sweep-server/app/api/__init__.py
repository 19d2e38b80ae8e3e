from fastapi import APIRouter

from app.api.routers import sweeps


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(sweeps.router, tags=["sweeps"])
    return router


__all__ = [
    "create_api_router",
]

"""Reusable FastAPI dependencies."""

from fastapi import Depends, Request

from app.core.container import ApplicationContainer
from app.domain.sweeps import SweepService


def get_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


def get_sweep_service(container: ApplicationContainer = Depends(get_container)) -> SweepService:
    return container.sweep_service()


__all__ = [
    "get_container",
    "get_sweep_service",
]

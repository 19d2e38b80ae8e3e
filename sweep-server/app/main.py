import logging
from contextlib import asynccontextmanager
from typing import Awaitable, Callable, Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from solana.rpc.async_api import AsyncClient

from app import __version__
from app.api import create_api_router
from app.core.config import LedgerSettings, Settings, get_settings
from app.core.container import ApplicationContainer
from app.domain.sweeps import ConnectivityError, CustodyError, SweepError, ValidationError
from app.infrastructure.solana.connection import close_connection, open_connection
from app.infrastructure.solana.keystore import KeyStore
from app.schemas import HealthResponse

logger = logging.getLogger(__name__)

ConnectionProvider = Callable[[LedgerSettings], Awaitable[AsyncClient]]

ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    CustodyError: status.HTTP_403_FORBIDDEN,
    ConnectivityError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def sweep_error_handler(request: Request, exc: SweepError) -> JSONResponse:
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"success": False, "error": str(exc)})


def create_app(
    settings: Optional[Settings] = None,
    connection_provider: ConnectionProvider = open_connection,
    keystore: Optional[KeyStore] = None,
) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Without a ledger connection no request can be served, so errors here abort startup.
        client = await connection_provider(settings.ledger)
        try:
            app.state.container = ApplicationContainer.build(settings, client, keystore)
            yield
        finally:
            await close_connection(client)

    app = FastAPI(
        title=settings.project_name,
        description="Custodial asset sweep service",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=["GET", "POST"],
            allow_headers=["Content-Type", "Authorization"],
        )

    app.add_exception_handler(SweepError, sweep_error_handler)
    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse()

    return app


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")


configure_logging(get_settings().log_level)
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, reload=settings.server.reload)

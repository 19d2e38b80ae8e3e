"""Lifecycle of the process-wide ledger RPC client."""

from __future__ import annotations

import logging

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment

from app.core.config import LedgerSettings
from app.domain.sweeps.exceptions import ConnectivityError

from .errors import RPC_ERRORS, describe_error

logger = logging.getLogger(__name__)


async def open_connection(settings: LedgerSettings) -> AsyncClient:
    """Create the RPC client and verify the node answers before serving requests."""
    client = AsyncClient(
        settings.rpc_url,
        commitment=Commitment(settings.commitment),
        timeout=settings.timeout_seconds,
    )
    try:
        version = await client.get_version()
    except RPC_ERRORS as exc:
        await client.close()
        detail = describe_error(exc)
        logger.error("Failed to reach ledger RPC %s: %s", settings.rpc_url, detail)
        raise ConnectivityError(f"ledger RPC unreachable: {detail}") from exc

    logger.info("Ledger connection established: %s (solana-core %s)", settings.rpc_url, version.value.solana_core)
    return client


async def close_connection(client: AsyncClient) -> None:
    await client.close()
    logger.info("Ledger connection closed")


__all__ = ["close_connection", "open_connection"]

"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solders.pubkey import Pubkey

from app.core.config import Settings
from app.domain.sweeps import SweepService, ValidationError
from app.domain.sweeps.scanner import parse_account
from app.infrastructure.solana.keystore import KeyStore


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    client: AsyncClient
    keystore: KeyStore
    destination: Pubkey

    @classmethod
    def build(cls, settings: Settings, client: AsyncClient, keystore: KeyStore | None = None) -> "ApplicationContainer":
        """Resolve startup configuration; a missing or malformed destination is fatal."""
        try:
            destination = parse_account(settings.sweep.destination or "")
        except ValidationError as exc:
            raise RuntimeError(f"SWEEP__DESTINATION is not a valid account: {exc}") from exc
        if keystore is None:
            keystore = KeyStore.from_directory(settings.custody_keys_dir)
        return cls(settings=settings, client=client, keystore=keystore, destination=destination)

    def sweep_service(self) -> SweepService:
        """Build a request-scoped sweep service over the shared client."""
        return SweepService.with_client(
            self.client,
            keystore=self.keystore,
            destination=self.destination,
            retention_fraction=self.settings.sweep.retention_fraction,
            commitment=Commitment(self.settings.ledger.commitment),
            confirm=self.settings.ledger.confirm_transfers,
        )


__all__ = ["ApplicationContainer"]

"""Sweep orchestration: scan, plan, transfer and report for one account."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Protocol

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from . import aggregator, planner
from .exceptions import ConnectivityError, ValidationError
from .executor import TransferExecutor
from .models import BalanceReport, BatchResponse
from .scanner import AssetScanner, parse_account

logger = logging.getLogger(__name__)


class SignerProvider(Protocol):
    def signer_for(self, account: Pubkey) -> Keypair:
        ...


@dataclass(slots=True)
class SweepService:
    scanner: AssetScanner
    executor: TransferExecutor
    keystore: SignerProvider
    destination: Pubkey
    retention_fraction: Decimal = planner.DEFAULT_RETENTION_FRACTION

    @classmethod
    def with_client(
        cls,
        client: AsyncClient,
        *,
        keystore: SignerProvider,
        destination: Pubkey,
        retention_fraction: Decimal = planner.DEFAULT_RETENTION_FRACTION,
        commitment: Optional[Commitment] = None,
        confirm: bool = False,
    ) -> "SweepService":
        return cls(
            scanner=AssetScanner(client),
            executor=TransferExecutor(client, commitment=commitment, confirm=confirm),
            keystore=keystore,
            destination=destination,
            retention_fraction=retention_fraction,
        )

    async def balances(self, account: str) -> BalanceReport:
        owner = parse_account(account)
        return BalanceReport(account=str(owner), balances=await self.scanner.scan(owner))

    async def sweep(self, account: str) -> BatchResponse:
        owner = parse_account(account)
        if owner == self.destination:
            raise ValidationError("account is the sweep destination")
        signer = self.keystore.signer_for(owner)

        logger.info("Sweeping %s to %s (retaining %s)", owner, self.destination, self.retention_fraction)
        try:
            balances = await self.scanner.scan(owner)
        except ConnectivityError as exc:
            logger.error("Sweep of %s aborted before any transfer: %s", owner, exc)
            return aggregator.aborted(str(exc))

        entries = planner.plan(balances, self.retention_fraction)
        results = await self.executor.execute(entries, signer, self.destination)
        batch = aggregator.merge(results)

        succeeded = sum(1 for result in batch.results if result.succeeded)
        logger.info(
            "Sweep of %s finished: %d planned, %d succeeded, %d failed",
            owner,
            len(entries),
            succeeded,
            len(batch.results) - succeeded,
        )
        return batch


__all__ = ["SignerProvider", "SweepService"]

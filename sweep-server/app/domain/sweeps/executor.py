"""Submission of one transfer per planned asset."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction

from app.infrastructure.solana.errors import RPC_ERRORS, describe_error

from .exceptions import PerAssetTransferError
from .models import SweepPlan, TransferResult

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TransferExecutor:
    """Builds, signs and submits sweep transfers.

    Entries are submitted strictly one after another. Transfers from the same
    account must reach the ledger in order, so the loop awaits each
    submission before building the next one and is never parallelised.
    """

    client: AsyncClient
    commitment: Optional[Commitment] = None
    confirm: bool = False

    async def execute(self, plan: Iterable[SweepPlan], source: Keypair, destination: Pubkey) -> list[TransferResult]:
        results: list[TransferResult] = []
        for entry in plan:
            try:
                signature = await self._submit(entry, source, destination)
            except PerAssetTransferError as exc:
                logger.warning("Transfer of %s %s failed: %s", entry.amount, entry.asset.asset_id, exc)
                results.append(TransferResult(asset=entry.asset, status="failed", signature_or_error=str(exc)))
                continue
            logger.info("Transferred %s %s: %s", entry.amount, entry.asset.asset_id, signature)
            results.append(TransferResult(asset=entry.asset, status="success", signature_or_error=str(signature)))
        return results

    async def _submit(self, entry: SweepPlan, source: Keypair, destination: Pubkey) -> Signature:
        payer = source.pubkey()
        try:
            instruction = entry.asset.build_transfer_instruction(payer, destination, entry.raw_amount)
            blockhash = (await self.client.get_latest_blockhash(self.commitment)).value.blockhash
            message = Message.new_with_blockhash([instruction], payer, blockhash)
            transaction = Transaction([source], message, blockhash)
            signature = (await self.client.send_transaction(transaction)).value
            if self.confirm:
                await self._confirm(signature)
        except PerAssetTransferError:
            raise
        except (*RPC_ERRORS, ValueError) as exc:
            raise PerAssetTransferError(describe_error(exc)) from exc
        return signature

    async def _confirm(self, signature: Signature) -> None:
        resp = await self.client.confirm_transaction(signature, self.commitment)
        statuses = resp.value
        status = statuses[0] if statuses else None
        if status is None:
            raise PerAssetTransferError(f"transaction {signature} was not confirmed")
        if status.err is not None:
            raise PerAssetTransferError(f"transaction {signature} failed: {status.err}")


__all__ = ["TransferExecutor"]

"""Discovery of every asset balance held by an account."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from solana.rpc.async_api import AsyncClient
from solana.rpc.models import TokenAccountOpts
from solders.pubkey import Pubkey
from spl.token.constants import TOKEN_2022_PROGRAM_ID, TOKEN_PROGRAM_ID

from app.infrastructure.solana.errors import RPC_ERRORS, describe_error

from .assets import NATIVE_DECIMALS, FungibleAsset, NativeAsset
from .exceptions import ConnectivityError, ValidationError
from .models import AssetBalance

logger = logging.getLogger(__name__)

TOKEN_PROGRAMS = (TOKEN_PROGRAM_ID, TOKEN_2022_PROGRAM_ID)


def parse_account(account: str) -> Pubkey:
    """Parse a base58 ledger address, raising ``ValidationError`` when malformed."""
    if not isinstance(account, str) or not account.strip():
        raise ValidationError("account identifier is required")
    try:
        return Pubkey.from_string(account.strip())
    except ValueError as exc:
        raise ValidationError(f"invalid account identifier: {account!r}") from exc


@dataclass(slots=True)
class AssetScanner:
    client: AsyncClient

    async def scan(self, account: str | Pubkey) -> list[AssetBalance]:
        owner = account if isinstance(account, Pubkey) else parse_account(account)

        try:
            native_resp = await self.client.get_balance(owner)
            token_resps = []
            for program in TOKEN_PROGRAMS:
                opts = TokenAccountOpts(program_id=program)
                token_resps.append((program, await self.client.get_token_accounts_by_owner_json_parsed(owner, opts)))
        except RPC_ERRORS as exc:
            detail = describe_error(exc)
            logger.error("Balance query for %s failed: %s", owner, detail)
            raise ConnectivityError(f"ledger query failed: {detail}") from exc

        balances = [AssetBalance(asset=NativeAsset(), raw_amount=int(native_resp.value), decimals=NATIVE_DECIMALS)]
        for program, token_resp in token_resps:
            for keyed in token_resp.value:
                balance = _token_balance(keyed.pubkey, keyed.account.data, program)
                if balance is not None:
                    balances.append(balance)

        logger.info("Scanned %s: %d lamports, %d token accounts", owner, balances[0].raw_amount, len(balances) - 1)
        return balances


def _token_balance(token_account: Pubkey, data: Any, token_program: Pubkey) -> Optional[AssetBalance]:
    try:
        info = data.parsed["info"]
        token_amount = info["tokenAmount"]
        asset = FungibleAsset(
            mint=Pubkey.from_string(info["mint"]),
            token_account=token_account,
            token_program=token_program,
        )
        return AssetBalance(
            asset=asset,
            raw_amount=int(token_amount["amount"]),
            decimals=int(token_amount["decimals"]),
        )
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        logger.warning("Skipping unparseable token account %s: %s", token_account, exc)
        return None


__all__ = ["AssetScanner", "parse_account"]

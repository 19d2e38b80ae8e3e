"""Asset kinds held by a ledger account.

Every kind knows how to build the single instruction that moves an amount of
itself from a source account to a destination account, so the executor never
branches on the asset type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from solders.instruction import Instruction
from solders.pubkey import Pubkey
from solders.system_program import TransferParams as SystemTransferParams
from solders.system_program import transfer as system_transfer
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.models import TransferParams as TokenTransferParams
from spl.token.instructions import get_associated_token_address
from spl.token.instructions import transfer as token_transfer

NATIVE_DECIMALS = 9
NATIVE_ASSET_ID = "SOL"


@dataclass(frozen=True, slots=True)
class NativeAsset:
    """The ledger's base currency, moved by the system program."""

    kind: ClassVar[str] = "native"

    @property
    def asset_id(self) -> str:
        return NATIVE_ASSET_ID

    def build_transfer_instruction(self, source: Pubkey, destination: Pubkey, raw_amount: int) -> Instruction:
        return system_transfer(
            SystemTransferParams(from_pubkey=source, to_pubkey=destination, lamports=raw_amount)
        )


@dataclass(frozen=True, slots=True)
class FungibleAsset:
    """A single SPL token account owned by the scanned account."""

    kind: ClassVar[str] = "fungible"

    mint: Pubkey
    token_account: Pubkey
    token_program: Pubkey = TOKEN_PROGRAM_ID

    @property
    def asset_id(self) -> str:
        return str(self.mint)

    def destination_token_account(self, destination: Pubkey) -> Pubkey:
        return get_associated_token_address(destination, self.mint, self.token_program)

    def build_transfer_instruction(self, source: Pubkey, destination: Pubkey, raw_amount: int) -> Instruction:
        # The destination's associated account must already exist; creating it
        # would take a second instruction.
        return token_transfer(
            TokenTransferParams(
                program_id=self.token_program,
                source=self.token_account,
                dest=self.destination_token_account(destination),
                owner=source,
                amount=raw_amount,
            )
        )


AssetKind = Union[NativeAsset, FungibleAsset]


__all__ = [
    "AssetKind",
    "FungibleAsset",
    "NATIVE_ASSET_ID",
    "NATIVE_DECIMALS",
    "NativeAsset",
]

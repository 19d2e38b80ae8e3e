"""Domain models for balance scans and sweep batches."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal, Optional

from .assets import AssetKind, NativeAsset

TransferStatus = Literal["success", "failed"]


@dataclass(frozen=True, slots=True)
class AssetBalance:
    asset: AssetKind
    raw_amount: int
    decimals: int

    @property
    def display_amount(self) -> Decimal:
        return Decimal(self.raw_amount).scaleb(-self.decimals)


@dataclass(frozen=True, slots=True)
class SweepPlan:
    asset: AssetKind
    raw_amount: int
    decimals: int

    @property
    def amount(self) -> Decimal:
        return Decimal(self.raw_amount).scaleb(-self.decimals)


@dataclass(frozen=True, slots=True)
class TransferResult:
    asset: AssetKind
    status: TransferStatus
    signature_or_error: str

    @property
    def signature(self) -> Optional[str]:
        return self.signature_or_error if self.status == "success" else None

    @property
    def succeeded(self) -> bool:
        return self.status == "success"


@dataclass(slots=True)
class BatchResponse:
    overall_success: bool
    results: list[TransferResult] = field(default_factory=list)
    error: Optional[str] = None


@dataclass(slots=True)
class BalanceReport:
    """Native balance plus every token balance, as returned by a scan."""

    account: str
    balances: list[AssetBalance]

    @property
    def native(self) -> AssetBalance:
        for balance in self.balances:
            if isinstance(balance.asset, NativeAsset):
                return balance
        raise LookupError("scan did not include a native balance")

    @property
    def tokens(self) -> list[AssetBalance]:
        return [balance for balance in self.balances if not isinstance(balance.asset, NativeAsset)]

"""Sweep domain exports"""

from .assets import AssetKind, FungibleAsset, NativeAsset
from .exceptions import ConnectivityError, CustodyError, PerAssetTransferError, SweepError, ValidationError
from .models import AssetBalance, BalanceReport, BatchResponse, SweepPlan, TransferResult
from .service import SweepService

__all__ = [
    "AssetBalance",
    "AssetKind",
    "BalanceReport",
    "BatchResponse",
    "ConnectivityError",
    "CustodyError",
    "FungibleAsset",
    "NativeAsset",
    "PerAssetTransferError",
    "SweepError",
    "SweepPlan",
    "SweepService",
    "TransferResult",
    "ValidationError",
]

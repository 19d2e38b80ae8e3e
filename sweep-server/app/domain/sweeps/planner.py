"""Computation of how much of each balance to sweep."""

from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal
from typing import Iterable, Union

from .models import AssetBalance, SweepPlan

DEFAULT_RETENTION_FRACTION = Decimal("0.05")


def _as_decimal(value: Union[Decimal, float, str]) -> Decimal:
    # str() keeps 0.05 from becoming 0.05000000000000000277
    return value if isinstance(value, Decimal) else Decimal(str(value))


def sweep_amount(raw_amount: int, retention_fraction: Union[Decimal, float, str]) -> int:
    """Amount in base units to move, rounded down so the source is never over-debited."""
    swept = Decimal(raw_amount) * (Decimal(1) - _as_decimal(retention_fraction))
    return int(swept.to_integral_value(rounding=ROUND_FLOOR))


def plan(
    balances: Iterable[AssetBalance],
    retention_fraction: Union[Decimal, float, str] = DEFAULT_RETENTION_FRACTION,
) -> list[SweepPlan]:
    fraction = _as_decimal(retention_fraction)
    if not Decimal(0) < fraction < Decimal(1):
        raise ValueError(f"retention fraction must be between 0 and 1, got {fraction}")

    entries = []
    for balance in balances:
        raw = sweep_amount(balance.raw_amount, fraction)
        if raw <= 0:
            continue
        entries.append(SweepPlan(asset=balance.asset, raw_amount=raw, decimals=balance.decimals))
    return entries


__all__ = ["DEFAULT_RETENTION_FRACTION", "plan", "sweep_amount"]

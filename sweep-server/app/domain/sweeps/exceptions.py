"""Sweep domain specific exceptions."""


class SweepError(Exception):
    """Base class for sweep domain errors."""


class ValidationError(SweepError):
    """Raised when an account identifier is malformed or not acceptable."""


class ConnectivityError(SweepError):
    """Raised when the ledger cannot be reached or a query fails."""


class CustodyError(SweepError):
    """Raised when no signing key is held for the requested account."""


class PerAssetTransferError(SweepError):
    """Raised when a single asset transfer is rejected; captured per asset."""

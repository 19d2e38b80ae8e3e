"""Ledger connection and custody key infrastructure."""

"""Signing keys for the accounts this service holds in custody."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from app.domain.sweeps.exceptions import CustodyError

logger = logging.getLogger(__name__)


def load_keypair(path: Path) -> Keypair:
    """Load a solana-keygen keypair file (JSON array of 64 integers)."""
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, list) or len(payload) != 64:
        raise ValueError(f"keypair file must hold 64 integers: {path}")
    return Keypair.from_bytes(bytes(int(value) for value in payload))


def dump_keypair(keypair: Keypair, path: Path) -> None:
    path.write_text(json.dumps(list(bytes(keypair))), encoding="utf-8")
    path.chmod(0o600)


@dataclass(slots=True)
class KeyStore:
    keys: dict[Pubkey, Keypair] = field(default_factory=dict)

    @classmethod
    def from_keypairs(cls, keypairs: Iterable[Keypair]) -> "KeyStore":
        return cls({keypair.pubkey(): keypair for keypair in keypairs})

    @classmethod
    def from_directory(cls, directory: Path) -> "KeyStore":
        if not directory.is_dir():
            logger.warning("Custody directory %s does not exist; no account can be swept", directory)
            return cls()

        keypairs = []
        for path in sorted(directory.glob("*.json")):
            try:
                keypairs.append(load_keypair(path))
            except (OSError, TypeError, ValueError) as exc:
                logger.error("Skipping unreadable keypair %s: %s", path, exc)
        store = cls.from_keypairs(keypairs)
        logger.info("Loaded %d custody keypairs from %s", len(store), directory)
        return store

    def __len__(self) -> int:
        return len(self.keys)

    def __contains__(self, account: Pubkey) -> bool:
        return account in self.keys

    def signer_for(self, account: Pubkey) -> Keypair:
        try:
            return self.keys[account]
        except KeyError:
            raise CustodyError(f"account {account} is not held in custody") from None


__all__ = ["KeyStore", "dump_keypair", "load_keypair"]

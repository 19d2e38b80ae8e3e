"""
Create a new custody keypair in the configured custody directory.

The public key printed at the end is the deposit account the service may sweep.
"""
import argparse
from pathlib import Path

from solders.keypair import Keypair

from app.core.config import get_settings
from app.infrastructure.solana.keystore import dump_keypair


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Create a custody keypair")
    parser.add_argument("--keys-dir", type=Path, default=settings.custody_keys_dir)
    args = parser.parse_args()

    keys_dir: Path = args.keys_dir
    keys_dir.mkdir(parents=True, exist_ok=True)

    keypair = Keypair()
    target = keys_dir / f"{keypair.pubkey()}.json"
    dump_keypair(keypair, target)

    print("=" * 50)
    print(f"Account: {keypair.pubkey()}")
    print(f"Keypair: {target}")
    print("=" * 50)


if __name__ == "__main__":
    main()

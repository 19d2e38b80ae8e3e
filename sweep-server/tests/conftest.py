from types import SimpleNamespace
from typing import Optional

import pytest
from solana.rpc.core import RPCException
from solders.hash import Hash
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature
from spl.token.constants import TOKEN_PROGRAM_ID

from app.infrastructure.solana.keystore import KeyStore


def token_account(
    mint: Pubkey,
    amount: int,
    decimals: int,
    pubkey: Optional[Pubkey] = None,
    program: Pubkey = TOKEN_PROGRAM_ID,
):
    parsed = {
        "info": {
            "mint": str(mint),
            "tokenAmount": {
                "amount": str(amount),
                "decimals": decimals,
                "uiAmountString": str(amount / 10**decimals),
            },
        },
        "type": "account",
    }
    return SimpleNamespace(
        pubkey=pubkey or Keypair().pubkey(),
        account=SimpleNamespace(owner=program, data=SimpleNamespace(parsed=parsed)),
    )


class FakeClient:
    """In-memory stand-in for ``AsyncClient`` that records every call."""

    def __init__(
        self,
        lamports: int = 0,
        token_accounts=(),
        scan_error: Optional[Exception] = None,
        failing_sends=(),
        confirm_error=None,
    ):
        self.lamports = lamports
        self.token_accounts = list(token_accounts)
        self.scan_error = scan_error
        self.failing_sends = set(failing_sends)
        self.confirm_error = confirm_error
        self.calls: list[str] = []
        self.sent = []
        self.closed = False

    async def get_version(self):
        self.calls.append("get_version")
        return SimpleNamespace(value=SimpleNamespace(solana_core="1.18.0"))

    async def get_balance(self, pubkey, commitment=None):
        self.calls.append("get_balance")
        if self.scan_error is not None:
            raise self.scan_error
        return SimpleNamespace(value=self.lamports)

    async def get_token_accounts_by_owner_json_parsed(self, owner, opts, commitment=None):
        self.calls.append("get_token_accounts_by_owner_json_parsed")
        return SimpleNamespace(value=[acc for acc in self.token_accounts if acc.account.owner == opts.program_id])

    async def get_latest_blockhash(self, commitment=None):
        self.calls.append("get_latest_blockhash")
        return SimpleNamespace(value=SimpleNamespace(blockhash=Hash.default(), last_valid_block_height=100))

    async def send_transaction(self, txn, opts=None):
        index = len(self.sent)
        self.calls.append("send_transaction")
        self.sent.append(txn)
        if index in self.failing_sends:
            raise RPCException("Transaction simulation failed: insufficient funds")
        return SimpleNamespace(value=Signature.new_unique())

    async def confirm_transaction(self, signature, commitment=None):
        self.calls.append("confirm_transaction")
        return SimpleNamespace(value=[SimpleNamespace(err=self.confirm_error, confirmation_status="confirmed")])

    async def close(self):
        self.closed = True


@pytest.fixture()
def source() -> Keypair:
    return Keypair()


@pytest.fixture()
def destination() -> Pubkey:
    return Keypair().pubkey()


@pytest.fixture()
def keystore(source: Keypair) -> KeyStore:
    return KeyStore.from_keypairs([source])

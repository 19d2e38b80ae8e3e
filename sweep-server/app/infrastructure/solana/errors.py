"""Exceptions raised by the ledger RPC client."""

import httpx
from solana.exceptions import SolanaRpcException
from solana.rpc.core import RPCException, TransactionExpiredBlockheightExceededError, UnconfirmedTxError

RPC_ERRORS = (
    SolanaRpcException,
    RPCException,
    UnconfirmedTxError,
    TransactionExpiredBlockheightExceededError,
    httpx.HTTPError,
)


def describe_error(exc: BaseException) -> str:
    """Readable detail for an RPC error; some of them render as an empty string."""
    detail = str(exc) or getattr(exc, "error_msg", None)
    if not detail and exc.args:
        detail = str(exc.args[0])
    return detail or exc.__class__.__name__


__all__ = ["RPC_ERRORS", "describe_error"]

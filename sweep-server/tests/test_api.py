from datetime import timedelta

import httpx
import pytest
from fastapi.testclient import TestClient
from solders.keypair import Keypair

from app.core.config import LedgerSettings, SecuritySettings, Settings, SweepSettings
from app.core.security import create_access_token
from app.domain.sweeps import ConnectivityError
from app.infrastructure.solana import connection
from app.infrastructure.solana.keystore import KeyStore
from app.main import create_app

from .conftest import FakeClient, token_account


@pytest.fixture()
def settings(destination) -> Settings:
    return Settings(
        security=SecuritySettings(secret_key="test-secret-key"),
        sweep=SweepSettings(destination=str(destination)),
    )


def _client_for(settings, ledger: FakeClient, keystore: KeyStore) -> TestClient:
    async def provider(_ledger_settings):
        return ledger

    return TestClient(create_app(settings, connection_provider=provider, keystore=keystore))


def _auth(settings, **kwargs) -> dict:
    return {"Authorization": f"Bearer {create_access_token('ops-test', settings=settings, **kwargs)}"}


def test_health(settings, keystore):
    with _client_for(settings, FakeClient(), keystore) as client:
        response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.parametrize("path", ["/api/connect", "/api/transfer"])
def test_missing_token_makes_no_ledger_calls(settings, keystore, source, path):
    ledger = FakeClient(lamports=1_000_000_000)
    with _client_for(settings, ledger, keystore) as client:
        response = client.post(path, json={"account": str(source.pubkey())})
    assert response.status_code in (401, 403)
    assert ledger.calls == []


def test_invalid_and_expired_tokens_are_rejected(settings, keystore, source):
    ledger = FakeClient(lamports=1_000_000_000)
    with _client_for(settings, ledger, keystore) as client:
        bad = client.post(
            "/api/transfer",
            json={"account": str(source.pubkey())},
            headers={"Authorization": "Bearer not-a-jwt"},
        )
        expired = client.post(
            "/api/transfer",
            json={"account": str(source.pubkey())},
            headers=_auth(settings, expires_delta=timedelta(minutes=-5)),
        )
    assert bad.status_code == 401
    assert expired.status_code == 401
    assert ledger.calls == []


def test_connect_reports_balances(settings, keystore, source):
    mint = Keypair().pubkey()
    ledger = FakeClient(lamports=1_500_000_000, token_accounts=[token_account(mint, 200_000_000, 6)])
    with _client_for(settings, ledger, keystore) as client:
        response = client.post("/api/connect", json={"publicKey": str(source.pubkey())}, headers=_auth(settings))

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert float(body["balance"]["native"]) == 1.5
    assert body["balance"]["tokens"][0]["assetId"] == str(mint)
    assert float(body["balance"]["tokens"][0]["amount"]) == 200.0


def test_transfer_returns_results_in_order(settings, keystore, source):
    mint = Keypair().pubkey()
    ledger = FakeClient(lamports=1_000_000_000, token_accounts=[token_account(mint, 200_000_000, 6)], failing_sends={1})
    with _client_for(settings, ledger, keystore) as client:
        response = client.post("/api/transfer", json={"account": str(source.pubkey())}, headers=_auth(settings))

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [r["assetKind"] for r in body["results"]] == ["native", "fungible"]
    assert [r["status"] for r in body["results"]] == ["success", "failed"]
    assert body["results"][1]["signatureOrError"]


def test_transfer_of_empty_account(settings, keystore, source):
    with _client_for(settings, FakeClient(lamports=0), keystore) as client:
        response = client.post("/api/transfer", json={"account": str(source.pubkey())}, headers=_auth(settings))
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["results"] == []


def test_malformed_account_is_a_client_error(settings, keystore):
    ledger = FakeClient()
    with _client_for(settings, ledger, keystore) as client:
        response = client.post("/api/connect", json={"account": "bogus"}, headers=_auth(settings))
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert ledger.calls == []


def test_uncustodied_account_is_forbidden(settings, keystore):
    with _client_for(settings, FakeClient(lamports=10), keystore) as client:
        response = client.post("/api/transfer", json={"account": str(Keypair().pubkey())}, headers=_auth(settings))
    assert response.status_code == 403
    assert response.json()["success"] is False


def test_scan_failure_is_a_server_error(settings, keystore, source):
    ledger = FakeClient(scan_error=httpx.ConnectError("refused"))
    with _client_for(settings, ledger, keystore) as client:
        connect = client.post("/api/connect", json={"account": str(source.pubkey())}, headers=_auth(settings))
        transfer = client.post("/api/transfer", json={"account": str(source.pubkey())}, headers=_auth(settings))

    assert connect.status_code == 503
    assert connect.json()["success"] is False
    assert transfer.status_code == 503
    assert transfer.json()["success"] is False
    assert transfer.json()["results"] == []


def test_unconfigured_destination_fails_startup(keystore):
    settings = Settings(security=SecuritySettings(secret_key="test-secret-key"))
    with pytest.raises(RuntimeError):
        with _client_for(settings, FakeClient(), keystore):
            pass


def test_client_is_closed_on_shutdown(settings, keystore):
    ledger = FakeClient()
    with _client_for(settings, ledger, keystore) as client:
        client.get("/health")
        assert ledger.closed is False
    assert ledger.closed is True


def test_unreachable_ledger_fails_startup(settings, keystore):
    async def provider(_ledger_settings):
        raise ConnectivityError("ledger RPC unreachable: refused")

    with pytest.raises(ConnectivityError):
        with TestClient(create_app(settings, connection_provider=provider, keystore=keystore)):
            pass


@pytest.mark.asyncio
async def test_open_connection_closes_client_when_version_check_fails(monkeypatch):
    ledger = FakeClient()

    async def refuse():
        raise httpx.ConnectError("connection refused")

    ledger.get_version = refuse
    monkeypatch.setattr(connection, "AsyncClient", lambda *args, **kwargs: ledger)

    with pytest.raises(ConnectivityError, match="connection refused"):
        await connection.open_connection(LedgerSettings(rpc_url="http://127.0.0.1:9"))
    assert ledger.closed is True


@pytest.mark.asyncio
async def test_open_connection_returns_checked_client(monkeypatch):
    ledger = FakeClient()
    monkeypatch.setattr(connection, "AsyncClient", lambda *args, **kwargs: ledger)

    assert await connection.open_connection(LedgerSettings()) is ledger
    assert ledger.calls == ["get_version"]
    assert ledger.closed is False


def test_small_and_zero_amounts_render_as_fixed_point(settings, keystore, source):
    mint = Keypair().pubkey()
    ledger = FakeClient(lamports=5, token_accounts=[token_account(mint, 0, 6)])
    with _client_for(settings, ledger, keystore) as client:
        response = client.post("/api/connect", json={"account": str(source.pubkey())}, headers=_auth(settings))

    balance = response.json()["balance"]
    assert balance["native"] == "0.000000005"
    assert balance["tokens"][0]["amount"] == "0.000000"

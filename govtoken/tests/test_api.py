import pytest

pytest.importorskip("fastapi")

from fastapi.testclient import TestClient  # noqa: E402

from govtoken import config  # noqa: E402
from govtoken.api import app  # noqa: E402


@pytest.fixture
def client(home):
    config.API_TOKEN_FILE.write_text(
        "# token principal\n"
        "gov-token gov\n"
        "minter-token minter\n"
        "alice-token alice\n"
    )
    return TestClient(app)


def call(client, who, path, body=None):
    return client.post(path, json=body or {}, headers={"X-API-Token": f"{who}-token"})


def test_health_is_open(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_missing_token_rejected(client):
    assert client.get("/token").status_code == 401
    assert client.get("/token", headers={"X-API-Token": "nope"}).status_code == 401


def test_supply_flow_over_http(client):
    assert call(client, "gov", "/initialize", {"name": "Governed", "symbol": "GOV"}).status_code == 200
    assert call(client, "gov", "/minters", {"user": "minter"}).json()["minters"] == ["minter"]
    assert call(client, "minter", "/mint", {"user": "alice", "amount": 25}).status_code == 200
    assert call(client, "alice", "/approve", {"spender": "minter", "amount": 10}).status_code == 200
    body = call(client, "minter", "/burn-from", {"account": "alice", "amount": 10}).json()
    assert body["total_supply"] == "15"

    resp = client.get("/balances/alice", headers={"X-API-Token": "alice-token"})
    assert resp.json()["balance"] == "15"


def test_errors_map_to_status_codes(client):
    call(client, "gov", "/initialize", {"name": "Governed", "symbol": "GOV"})
    resp = call(client, "alice", "/mint", {"user": "alice", "amount": 1})
    assert resp.status_code == 403
    assert resp.json()["detail"]["error"] == "Unauthorized"
    assert call(client, "alice", "/initialize", {"name": "X", "symbol": "X"}).status_code == 409
    call(client, "gov", "/minters", {"user": "minter"})
    resp = call(client, "minter", "/burn", {"amount": 1})
    assert resp.status_code == 400
    assert resp.json()["detail"]["error"] == "InsufficientBalance"


def test_governance_handoff_over_http(client):
    call(client, "gov", "/initialize", {"name": "Governed", "symbol": "GOV"})
    assert call(client, "gov", "/governance/propose", {"candidate": "alice"}).json()["pending_governance"] == "alice"
    assert call(client, "minter", "/governance/accept").status_code == 403
    body = call(client, "alice", "/governance/accept").json()
    assert body["governance"] == "alice"
    assert body["pending_governance"] is None


def test_blank_principal_is_a_client_error(client):
    call(client, "gov", "/initialize", {"name": "Governed", "symbol": "GOV"})
    resp = call(client, "gov", "/minters", {"user": "   "})
    assert resp.status_code == 400
    assert resp.json()["detail"]["error"] == "InvalidPrincipal"
    assert call(client, "gov", "/mint", {"user": "", "amount": 1}).status_code == 400


def test_read_routes_normalize_principals(client):
    call(client, "gov", "/initialize", {"name": "Governed", "symbol": "GOV"})
    call(client, "gov", "/minters", {"user": "minter"})
    call(client, "minter", "/mint", {"user": "alice", "amount": 9})
    call(client, "alice", "/approve", {"spender": "minter", "amount": 4})
    headers = {"X-API-Token": "alice-token"}

    body = client.get("/balances/ alice ", headers=headers).json()
    assert body == {"account": "alice", "balance": "9"}
    body = client.get("/allowances/ alice / minter ", headers=headers).json()
    assert body["allowance"] == "4"
    assert client.get("/balances/ ", headers=headers).status_code == 400

import pytest

from govtoken import config
from govtoken.token import Token

GOV = "gov"
MINTER = "minter"
ALICE = "alice"
BOB = "bob"


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DATA_DIR", tmp_path)
    monkeypatch.setattr(config, "STATE_FILE", tmp_path / "token.yaml")
    monkeypatch.setattr(config, "LOCK_DIR", tmp_path / "locks")
    monkeypatch.setattr(config, "DB_FILE", tmp_path / "govtoken.db")
    monkeypatch.setattr(config, "AUDIT_LOG_FILE", tmp_path / "audit.log")
    monkeypatch.setattr(config, "API_TOKEN_FILE", tmp_path / "api_tokens.txt")
    monkeypatch.delenv(config.API_TOKEN_ENV, raising=False)
    monkeypatch.delenv(config.API_PRINCIPAL_ENV, raising=False)
    return tmp_path


@pytest.fixture
def events():
    return []


@pytest.fixture
def token(events):
    tok = Token(listeners=[events.append])
    tok.initialize(GOV, "Governed", "GOV")
    events.clear()
    return tok


@pytest.fixture
def minted(token, events):
    token.set_minter(GOV, MINTER, True)
    token.mint(MINTER, MINTER, 100)
    token.mint(MINTER, ALICE, 50)
    events.clear()
    return token

"""FastAPI wrapper around the token for agents/humans via HTTP.

Each API token is bound to the principal it acts as (``<token> <principal>``
per line in the token file), so callers cannot choose their own identity.
"""

import os
from typing import Dict, Optional

try:
    from fastapi import Depends, FastAPI, Header, HTTPException, Request
    from fastapi.responses import JSONResponse
    from pydantic import BaseModel
except ImportError as exc:  # pragma: no cover
    raise SystemExit(
        "FastAPI not installed. Install with: pip install fastapi uvicorn\n"
        "You can still use the CLI via `python -m govtoken.cli`."
    ) from exc

from . import audit, config
from .errors import AlreadyInitialized, TokenError, Unauthorized
from .storage import load_token, transaction
from .utils import normalize_principal


def _load_api_tokens() -> Dict[str, str]:
    tokens: Dict[str, str] = {}
    env_token = os.environ.get(config.API_TOKEN_ENV)
    env_principal = os.environ.get(config.API_PRINCIPAL_ENV)
    if env_token and env_principal:
        tokens[env_token.strip()] = env_principal.strip()
    path = config.API_TOKEN_FILE
    if path.exists():
        for line in path.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split()
            if len(parts) == 2:
                tokens[parts[0]] = parts[1]
    return tokens


def require_caller(x_api_token: Optional[str] = Header(None)) -> str:
    tokens = _load_api_tokens()
    if not tokens:
        raise HTTPException(status_code=500, detail="API token not configured")
    if not x_api_token or x_api_token not in tokens:
        raise HTTPException(status_code=401, detail="Invalid or missing API token")
    return tokens[x_api_token]


def _status_for(exc: TokenError) -> int:
    if isinstance(exc, Unauthorized):
        return 403
    if isinstance(exc, AlreadyInitialized):
        return 409
    return 400


def _apply(caller: str, action) -> dict:
    with transaction(listeners=[audit.listener(caller)]) as token:
        action(token)
    return _summary(token)


def _summary(token) -> dict:
    return {
        "initialized": token.initialized,
        "name": token.name,
        "symbol": token.symbol,
        "decimals": token.decimals,
        "total_supply": str(token.total_supply),
        "governance": token.governance_principal,
        "pending_governance": token.pending_governance,
        "minters": token.minters.minters(),
    }


class InitializeIn(BaseModel):
    name: str
    symbol: str


class ProposeIn(BaseModel):
    candidate: Optional[str] = None


class MinterIn(BaseModel):
    user: str
    allowed: bool = True


class MintIn(BaseModel):
    user: str
    amount: int


class BurnIn(BaseModel):
    amount: int


class BurnFromIn(BaseModel):
    account: str
    amount: int


class TransferIn(BaseModel):
    recipient: str
    amount: int


class ApproveIn(BaseModel):
    spender: str
    amount: int


app = FastAPI(title="govtoken API", version="0.1.0")


@app.exception_handler(TokenError)
def token_error_handler(_: Request, exc: TokenError):
    return JSONResponse(
        status_code=_status_for(exc),
        content={"detail": {"error": type(exc).__name__, "message": str(exc)}},
    )


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/token")
def get_token(_: str = Depends(require_caller)):
    return _summary(load_token())


@app.get("/balances/{account}")
def get_balance(account: str, _: str = Depends(require_caller)):
    account = normalize_principal(account)
    return {"account": account, "balance": str(load_token().balance_of(account))}


@app.get("/allowances/{owner}/{spender}")
def get_allowance(owner: str, spender: str, _: str = Depends(require_caller)):
    owner = normalize_principal(owner)
    spender = normalize_principal(spender)
    return {"owner": owner, "spender": spender, "allowance": str(load_token().allowance(owner, spender))}


@app.post("/initialize")
def initialize(body: InitializeIn, caller: str = Depends(require_caller)):
    return _apply(caller, lambda token: token.initialize(caller, body.name, body.symbol))


@app.post("/governance/propose")
def propose_governance(body: ProposeIn, caller: str = Depends(require_caller)):
    candidate = normalize_principal(body.candidate)
    return _apply(caller, lambda token: token.propose_governance(caller, candidate))


@app.post("/governance/accept")
def accept_governance(caller: str = Depends(require_caller)):
    return _apply(caller, lambda token: token.accept_governance(caller))


@app.post("/minters")
def set_minter(body: MinterIn, caller: str = Depends(require_caller)):
    user = normalize_principal(body.user)
    return _apply(caller, lambda token: token.set_minter(caller, user, body.allowed))


@app.post("/mint")
def mint(body: MintIn, caller: str = Depends(require_caller)):
    user = normalize_principal(body.user)
    return _apply(caller, lambda token: token.mint(caller, user, body.amount))


@app.post("/burn")
def burn(body: BurnIn, caller: str = Depends(require_caller)):
    return _apply(caller, lambda token: token.burn(caller, body.amount))


@app.post("/burn-from")
def burn_from(body: BurnFromIn, caller: str = Depends(require_caller)):
    account = normalize_principal(body.account)
    return _apply(caller, lambda token: token.burn_from(caller, account, body.amount))


@app.post("/transfer")
def transfer(body: TransferIn, caller: str = Depends(require_caller)):
    recipient = normalize_principal(body.recipient)
    return _apply(caller, lambda token: token.transfer(caller, recipient, body.amount))


@app.post("/approve")
def approve(body: ApproveIn, caller: str = Depends(require_caller)):
    spender = normalize_principal(body.spender)
    return _apply(caller, lambda token: token.approve(caller, spender, body.amount))

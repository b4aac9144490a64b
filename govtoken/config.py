import os
from pathlib import Path

# Base directory of the package
BASE_DIR = Path(__file__).resolve().parent

# Storage locations
DATA_DIR = Path(os.environ.get("GOVTOKEN_HOME", BASE_DIR / "data"))
STATE_FILE = DATA_DIR / "token.yaml"
LOCK_DIR = DATA_DIR / "locks"
DB_FILE = DATA_DIR / "govtoken.db"

# Ledger defaults
DEFAULT_DECIMALS = 18
MAX_UINT256 = 2**256 - 1

# Auth / audit
AUDIT_LOG_FILE = DATA_DIR / "audit.log"
API_TOKEN_ENV = "GOVTOKEN_API_TOKEN"
API_PRINCIPAL_ENV = "GOVTOKEN_API_PRINCIPAL"
API_TOKEN_FILE = DATA_DIR / "api_tokens.txt"

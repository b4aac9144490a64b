"""
Governed mintable token.

This package provides a fungible balance ledger whose supply is controlled by
a two-tier authority model: a single governance principal, handed over with a
propose/accept protocol, manages a registry of minters, and only minters may
mint, burn or burn on behalf of others.
"""

from .errors import (  # noqa: F401
    AlreadyInitialized,
    InsufficientAllowance,
    InsufficientBalance,
    InvalidAmount,
    InvalidPrincipal,
    Overflow,
    ReentrantCall,
    TokenError,
    Unauthorized,
)
from .state import TokenState  # noqa: F401
from .token import Token  # noqa: F401

__all__ = [
    "AlreadyInitialized",
    "InsufficientAllowance",
    "InsufficientBalance",
    "InvalidAmount",
    "InvalidPrincipal",
    "Overflow",
    "ReentrantCall",
    "Token",
    "TokenError",
    "TokenState",
    "Unauthorized",
]

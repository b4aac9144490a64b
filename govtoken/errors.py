class TokenError(Exception):
    """Base class for every failure a token call can report."""


class Unauthorized(TokenError):
    """Caller lacks the governance, pending-governance or minter role."""


class AlreadyInitialized(TokenError):
    pass


class InsufficientBalance(TokenError):
    pass


class InsufficientAllowance(TokenError):
    pass


class Overflow(TokenError):
    pass


class InvalidAmount(TokenError, ValueError):
    pass


class ReentrantCall(TokenError):
    """A token call was entered while another call was still running."""


class InvalidPrincipal(TokenError, ValueError):
    pass

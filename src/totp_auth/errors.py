"""Error types raised by totp-auth."""


class TotpAuthError(Exception):
    """Base class for all totp-auth errors."""


class FormatError(TotpAuthError, ValueError):
    """Raised when base32 text or a candidate code is malformed."""


class PreconditionError(TotpAuthError, ValueError):
    """Raised when a parameter is outside its allowed range."""


class RandomSourceUnavailable(TotpAuthError, RuntimeError):
    """Raised when the secure random source cannot be read."""

"""RFC 4226 HOTP (HMAC-based One-Time Password) implementation."""

import hashlib
import hmac

from totp_auth.errors import PreconditionError


MIN_DIGITS = 6
MAX_DIGITS = 8
MAX_COUNTER = 2**64 - 1


def generate_hotp(secret: bytes, counter: int, digits: int = 6) -> str:
    """
    Generate an HOTP code using RFC 4226.

    Args:
        secret: The raw HOTP secret bytes.
        counter: The moving counter value, an unsigned 64-bit integer.
        digits: Number of digits in the output code (6 to 8, default: 6).

    Returns:
        A zero-padded HOTP code string.

    Raises:
        PreconditionError: If the secret is empty, the counter is out of
            range, or digits is not an integer between 6 and 8.
    """
    if not isinstance(secret, (bytes, bytearray)) or not secret:
        raise PreconditionError("HOTP secret must be non-empty bytes")
    for name, value in (("digits", digits), ("counter", counter)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise PreconditionError(f"{name} must be an integer, got {value!r}")
    if not MIN_DIGITS <= digits <= MAX_DIGITS:
        raise PreconditionError(
            f"digits must be between {MIN_DIGITS} and {MAX_DIGITS}, got {digits}"
        )
    if not 0 <= counter <= MAX_COUNTER:
        raise PreconditionError(f"counter must fit in an unsigned 64-bit integer, got {counter}")

    # Convert counter to 8-byte big-endian integer
    counter_bytes = counter.to_bytes(8, byteorder="big")

    # Compute HMAC-SHA1
    hmac_digest = hmac.new(bytes(secret), counter_bytes, hashlib.sha1).digest()

    # Dynamic truncation (RFC 4226, Section 5.4)
    offset = hmac_digest[-1] & 0x0F
    binary = (
        ((hmac_digest[offset] & 0x7F) << 24)
        | ((hmac_digest[offset + 1] & 0xFF) << 16)
        | ((hmac_digest[offset + 2] & 0xFF) << 8)
        | (hmac_digest[offset + 3] & 0xFF)
    )

    # Generate code: binary % 10^digits, zero-padded
    code = binary % (10**digits)
    return f"{code:0{digits}d}"

"""RFC 6238 TOTP (Time-based One-Time Password) on top of HOTP."""

from cryptography.hazmat.primitives import constant_time

from totp_auth.errors import PreconditionError
from totp_auth.hotp import MAX_COUNTER, generate_hotp


DEFAULT_STEP_SECONDS = 30
DEFAULT_WINDOW = 1


def counter_for(unix_seconds: int, step_seconds: int = DEFAULT_STEP_SECONDS) -> int:
    """
    Compute the time step counter for a Unix timestamp.

    Args:
        unix_seconds: Seconds since the Unix epoch (UTC).
        step_seconds: Length of one time step in seconds (default: 30).

    Returns:
        ``unix_seconds // step_seconds``.

    Raises:
        PreconditionError: If step_seconds is not positive or the timestamp
            is negative.
    """
    if step_seconds <= 0:
        raise PreconditionError(f"step_seconds must be positive, got {step_seconds}")
    if unix_seconds < 0:
        raise PreconditionError(f"unix_seconds must not be negative, got {unix_seconds}")
    return int(unix_seconds) // step_seconds


def generate_totp(
    secret: bytes,
    unix_seconds: int,
    step_seconds: int = DEFAULT_STEP_SECONDS,
    digits: int = 6,
) -> str:
    """Generate the TOTP code valid at ``unix_seconds``."""
    return generate_hotp(secret, counter_for(unix_seconds, step_seconds), digits)


def validate_totp(
    secret: bytes,
    candidate: str,
    unix_seconds: int,
    step_seconds: int = DEFAULT_STEP_SECONDS,
    digits: int = 6,
    window: int = DEFAULT_WINDOW,
) -> bool:
    """
    Check a candidate code against the time steps around ``unix_seconds``.

    Every step from ``counter - window`` to ``counter + window`` is tried and
    compared in constant time. A candidate of the wrong length walks the same
    window as a wrong code of the right length before it is rejected.

    Args:
        secret: The raw TOTP secret bytes.
        candidate: The code supplied by the user.
        unix_seconds: Seconds since the Unix epoch (UTC).
        step_seconds: Length of one time step in seconds (default: 30).
        digits: Expected code length (default: 6).
        window: Number of adjacent steps accepted on each side (default: 1).

    Returns:
        True if the candidate matches any step in the window.

    Raises:
        PreconditionError: If any parameter is out of range.
    """
    if window < 0:
        raise PreconditionError(f"window must not be negative, got {window}")

    counter = counter_for(unix_seconds, step_seconds)

    raw = candidate.encode("utf-8", "replace")
    length_ok = len(raw) == digits
    # Fixed-width buffer so the comparison below always sees equal lengths
    probe = raw[:digits].ljust(digits, b"\0")

    for delta in range(-window, window + 1):
        step = counter + delta
        if step < 0 or step > MAX_COUNTER:
            continue
        expected = generate_hotp(secret, step, digits).encode("ascii")
        if constant_time.bytes_eq(expected, probe) and length_ok:
            return True
    return False

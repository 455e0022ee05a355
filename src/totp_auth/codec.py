"""Base32 encoding of TOTP secrets as used by authenticator apps."""

import base64
import binascii
import re

from totp_auth.errors import FormatError


_BASE32_BODY = re.compile(r"[A-Za-z2-7]*", re.ASCII)
_WHITESPACE = re.compile(r"\s+")


def encode_secret(data: bytes) -> str:
    """
    Encode a raw secret as unpadded, uppercase RFC 4648 base32.

    Args:
        data: The raw secret bytes.

    Returns:
        Base32 text without ``=`` padding.
    """
    return base64.b32encode(bytes(data)).decode("ascii").rstrip("=")


def decode_secret(text: str) -> bytes:
    """
    Decode base32 text back into the raw secret.

    Whitespace is ignored so that space-grouped manual entry codes can be
    passed as-is. Lowercase letters and trailing ``=`` padding are accepted.

    Args:
        text: Base32 encoded secret.

    Returns:
        Decoded secret as bytes.

    Raises:
        FormatError: If the text contains characters outside the base32
            alphabet or does not have a valid base32 length.
    """
    if not isinstance(text, str):
        raise FormatError(f"Base32 secret must be a string, not {type(text).__name__}")

    # Alphabet check before case folding; str.upper maps some non-ASCII
    # letters onto A-Z
    body = _WHITESPACE.sub("", text).rstrip("=")
    if not _BASE32_BODY.fullmatch(body):
        raise FormatError("Base32 secret contains characters outside A-Z and 2-7")

    # Re-pad to a full 8-character quantum
    padded = body + "=" * (-len(body) % 8)
    try:
        return base64.b32decode(padded, casefold=True)
    except binascii.Error as e:
        raise FormatError(f"Invalid base32 secret length: {e}") from e

"""Secret generation and provisioning material for authenticator apps."""

import logging
import os
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import quote, urlencode

from totp_auth.codec import decode_secret, encode_secret
from totp_auth.config import MIN_SECRET_BYTES, TotpConfig
from totp_auth.errors import PreconditionError, RandomSourceUnavailable
from totp_auth.hotp import MAX_DIGITS, MIN_DIGITS


logger = logging.getLogger(__name__)

ALGORITHM = "SHA1"

RandomSource = Callable[[int], bytes]


def generate_secret(
    byte_length: int = MIN_SECRET_BYTES, random_source: RandomSource = os.urandom
) -> bytes:
    """
    Draw a fresh secret from a cryptographically secure random source.

    Args:
        byte_length: Number of random bytes (at least 10, default: 10).
        random_source: Callable returning ``n`` secure random bytes
            (default: ``os.urandom``).

    Returns:
        The new secret.

    Raises:
        PreconditionError: If byte_length is below 10.
        RandomSourceUnavailable: If the random source cannot be read.
    """
    if byte_length < MIN_SECRET_BYTES:
        raise PreconditionError(
            f"Secrets must be at least {MIN_SECRET_BYTES} bytes, got {byte_length}"
        )

    try:
        secret = random_source(byte_length)
    except (OSError, NotImplementedError) as e:
        raise RandomSourceUnavailable(f"Secure random source unavailable: {e}") from e

    if not isinstance(secret, bytes) or len(secret) != byte_length:
        raise RandomSourceUnavailable(
            f"Secure random source returned a short read for {byte_length} bytes"
        )

    logger.info("Generated %d-byte TOTP secret", byte_length)
    return secret


def manual_entry_code(secret: bytes, grouped: bool = False) -> str:
    """
    Render a secret for manual entry into an authenticator app.

    Args:
        secret: The raw secret bytes.
        grouped: Split the code into space-separated blocks of four.

    Returns:
        Base32 text, optionally grouped.
    """
    encoded = encode_secret(secret)
    if not grouped:
        return encoded
    return " ".join(encoded[i : i + 4] for i in range(0, len(encoded), 4))


@dataclass(frozen=True)
class ProvisioningMaterial:
    """Everything an authenticator app needs to add a TOTP entry."""

    issuer: str
    account: str
    encoded_secret: str
    algorithm: str = ALGORITHM
    digits: int = 6
    step_seconds: int = 30

    def __post_init__(self) -> None:
        if not self.account:
            raise PreconditionError("account label must not be empty")
        if self.algorithm != ALGORITHM:
            raise PreconditionError(f"Unsupported algorithm: {self.algorithm}")
        if not MIN_DIGITS <= self.digits <= MAX_DIGITS:
            raise PreconditionError(
                f"digits must be between {MIN_DIGITS} and {MAX_DIGITS}, got {self.digits}"
            )
        if self.step_seconds <= 0:
            raise PreconditionError(f"step_seconds must be positive, got {self.step_seconds}")
        # Raises FormatError for text an app could not import
        decode_secret(self.encoded_secret)

    @classmethod
    def from_secret(
        cls,
        secret: bytes,
        issuer: str,
        account: str,
        config: Optional[TotpConfig] = None,
    ) -> "ProvisioningMaterial":
        config = config or TotpConfig()
        return cls(
            issuer=issuer,
            account=account,
            encoded_secret=encode_secret(secret),
            digits=config.digits,
            step_seconds=config.step_seconds,
        )


def build_provisioning_uri(material: ProvisioningMaterial) -> str:
    """
    Build the ``otpauth://`` URI that authenticator apps import.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    Args:
        material: The provisioning material.

    Returns:
        The provisioning URI, with ``secret`` as the first query parameter.
    """
    label = quote(material.account, safe="")
    params = {"secret": material.encoded_secret}
    if material.issuer:
        label = quote(material.issuer, safe="") + ":" + label
        params["issuer"] = material.issuer
    params["algorithm"] = material.algorithm
    params["digits"] = str(material.digits)
    params["period"] = str(material.step_seconds)

    return f"otpauth://totp/{label}?{urlencode(params, quote_via=quote)}"


@dataclass(frozen=True)
class EnrollmentBundle:
    """Result of enrolling an account: the secret plus what to show the user."""

    secret: bytes
    manual_entry_code: str
    provisioning_uri: str
    material: ProvisioningMaterial

    def __repr__(self) -> str:
        return (
            f"EnrollmentBundle(issuer={self.material.issuer!r}, "
            f"account={self.material.account!r})"
        )


class Enrollment:
    """
    Enrolls accounts into TOTP two-factor authentication.

    The caller is responsible for persisting ``EnrollmentBundle.secret`` and
    for presenting the manual entry code and provisioning URI to the user.
    """

    def __init__(
        self,
        config: Optional[TotpConfig] = None,
        random_source: RandomSource = os.urandom,
    ):
        """
        Initialize an Enrollment.

        Args:
            config: Digits, step length and secret size (default: TotpConfig()).
            random_source: Secure random byte source (default: os.urandom).
        """
        self.config = config or TotpConfig()
        self.random_source = random_source

    def generate_secret(self) -> bytes:
        """Generate a secret of the configured length."""
        return generate_secret(self.config.secret_byte_length, self.random_source)

    def material_for(self, secret: bytes, issuer: str, account: str) -> ProvisioningMaterial:
        """Bundle a secret with labels and the configured parameters."""
        return ProvisioningMaterial.from_secret(secret, issuer, account, self.config)

    def enroll(self, issuer: str, account: str, grouped: bool = True) -> EnrollmentBundle:
        """
        Generate a new secret and its provisioning material in one call.

        Args:
            issuer: Service name shown in the authenticator app.
            account: Account label, usually the user's email address.
            grouped: Group the manual entry code in blocks of four
                (default: True). Unlike manual_entry_code, which defaults to
                the plain encoded form, the bundle is meant for display.

        Returns:
            The enrollment bundle.

        Raises:
            PreconditionError: If the account label is empty.
            RandomSourceUnavailable: If no secret could be generated.
        """
        secret = self.generate_secret()
        material = self.material_for(secret, issuer, account)
        uri = build_provisioning_uri(material)
        logger.info("Built TOTP provisioning material for issuer %r", issuer)

        return EnrollmentBundle(
            secret=secret,
            manual_entry_code=manual_entry_code(secret, grouped=grouped),
            provisioning_uri=uri,
            material=material,
        )

"""Validation of user-entered TOTP codes."""

import enum
import logging
import time
from typing import Callable, Optional

from totp_auth.codec import decode_secret
from totp_auth.config import TotpConfig
from totp_auth.errors import FormatError
from totp_auth.totp import validate_totp


logger = logging.getLogger(__name__)

_ASCII_DIGITS = frozenset("0123456789")


class ValidationResult(enum.Enum):
    """Outcome of checking a well-formed code."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def accepted(self) -> bool:
        return self is ValidationResult.ACCEPTED


class Validator:
    """
    Checks user-entered codes against stored secrets.

    The clock must return wall-clock UTC seconds, since the server and the
    authenticator app have to agree on absolute time.
    """

    def __init__(
        self,
        config: Optional[TotpConfig] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.config = config or TotpConfig()
        self.clock = clock or time.time

    def check_code(self, secret: bytes, user_input: str) -> ValidationResult:
        """
        Check a code typed by the user.

        Args:
            secret: The raw secret stored at enrollment.
            user_input: The code as entered; surrounding whitespace is ignored.

        Returns:
            ValidationResult.ACCEPTED or ValidationResult.REJECTED.

        Raises:
            FormatError: If the input is not exactly ``digits`` ASCII digits.
            PreconditionError: If the secret is empty.
        """
        code = user_input.strip()
        if len(code) != self.config.digits or not set(code) <= _ASCII_DIGITS:
            logger.info("Rejected malformed TOTP input of length %d", len(code))
            raise FormatError(f"Code must be exactly {self.config.digits} decimal digits")

        ok = validate_totp(
            secret,
            code,
            int(self.clock()),
            step_seconds=self.config.step_seconds,
            digits=self.config.digits,
            window=self.config.window,
        )
        result = ValidationResult.ACCEPTED if ok else ValidationResult.REJECTED
        logger.debug("TOTP code %s", result.value)
        return result

    def check_encoded(self, encoded_secret: str, user_input: str) -> ValidationResult:
        """Like check_code, for a secret stored in its base32 form."""
        return self.check_code(decode_secret(encoded_secret), user_input)

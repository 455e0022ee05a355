"""Configuration for enrollment and validation."""

from dataclasses import dataclass, fields
from typing import Any, Mapping

from totp_auth.errors import PreconditionError
from totp_auth.hotp import MAX_DIGITS, MIN_DIGITS


MIN_SECRET_BYTES = 10

# Option names as they appear in external configuration
_OPTION_ALIASES = {
    "digits": "digits",
    "stepSeconds": "step_seconds",
    "step_seconds": "step_seconds",
    "window": "window",
    "secretByteLength": "secret_byte_length",
    "secret_byte_length": "secret_byte_length",
}


@dataclass(frozen=True)
class TotpConfig:
    """
    Parameters shared by enrollment and validation.

    Instances are immutable and validated on construction, so a config that
    exists is always usable.
    """

    digits: int = 6
    step_seconds: int = 30
    window: int = 1
    secret_byte_length: int = MIN_SECRET_BYTES

    def __post_init__(self) -> None:
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise PreconditionError(f"{field.name} must be an integer, got {value!r}")

        if not MIN_DIGITS <= self.digits <= MAX_DIGITS:
            raise PreconditionError(
                f"digits must be between {MIN_DIGITS} and {MAX_DIGITS}, got {self.digits}"
            )
        if self.step_seconds <= 0:
            raise PreconditionError(f"step_seconds must be positive, got {self.step_seconds}")
        if self.window < 0:
            raise PreconditionError(f"window must not be negative, got {self.window}")
        if self.secret_byte_length < MIN_SECRET_BYTES:
            raise PreconditionError(
                f"secret_byte_length must be at least {MIN_SECRET_BYTES}, "
                f"got {self.secret_byte_length}"
            )

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "TotpConfig":
        """
        Build a config from a mapping of option names.

        Both ``stepSeconds``/``secretByteLength`` and their snake_case
        spellings are recognised.

        Raises:
            PreconditionError: On unknown option names or invalid values.
        """
        kwargs = {}
        for key, value in options.items():
            try:
                name = _OPTION_ALIASES[key]
            except KeyError:
                raise PreconditionError(f"Unknown TOTP option: {key!r}") from None
            kwargs[name] = value
        return cls(**kwargs)

"""Tests for HOTP generation."""

import pytest

from totp_auth.errors import PreconditionError
from totp_auth.hotp import MAX_COUNTER, generate_hotp


# RFC 4226 test vectors (Appendix D)
# Secret: "12345678901234567890" (Base32: GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ)
RFC4226_SECRET = b"12345678901234567890"
RFC4226_TEST_VECTORS = [
    # (counter, expected_code)
    (0, "755224"),
    (1, "287082"),
    (2, "359152"),
    (3, "969429"),
    (4, "338314"),
    (5, "254676"),
    (6, "287922"),
    (7, "162583"),
    (8, "399871"),
    (9, "520489"),
]


@pytest.mark.parametrize("counter,expected_code", RFC4226_TEST_VECTORS)
def test_rfc4226_test_vectors(counter, expected_code):
    """Test HOTP generation against RFC 4226 test vectors."""
    assert generate_hotp(RFC4226_SECRET, counter, digits=6) == expected_code


def test_hotp_different_digits():
    """Test HOTP generation with different digit counts."""
    code_6 = generate_hotp(RFC4226_SECRET, 0, digits=6)
    code_7 = generate_hotp(RFC4226_SECRET, 0, digits=7)
    code_8 = generate_hotp(RFC4226_SECRET, 0, digits=8)

    assert len(code_6) == 6
    assert len(code_7) == 7
    assert len(code_8) == 8

    # 6-digit code should be a suffix of 7-digit code
    assert code_7.endswith(code_6)
    assert code_8.endswith(code_7)


def test_hotp_default_digits():
    """Test that six digits are produced by default."""
    assert generate_hotp(RFC4226_SECRET, 1) == "287082"


def test_hotp_bytearray_secret():
    """Test HOTP generation with a bytearray secret."""
    assert generate_hotp(bytearray(RFC4226_SECRET), 0) == "755224"


def test_hotp_deterministic():
    """Test that identical inputs always give identical codes."""
    codes = {generate_hotp(RFC4226_SECRET, 123456789, digits=8) for _ in range(20)}
    assert len(codes) == 1


def test_hotp_accepts_largest_counter():
    """Test that the full unsigned 64-bit counter range is usable."""
    code = generate_hotp(RFC4226_SECRET, MAX_COUNTER)
    assert len(code) == 6
    assert code.isdigit()


@pytest.mark.parametrize("digits", [5, 9, 0, -6])
def test_hotp_invalid_digits(digits):
    """Test that digit counts outside 6..8 are rejected."""
    with pytest.raises(PreconditionError, match="digits must be between"):
        generate_hotp(RFC4226_SECRET, 0, digits=digits)


def test_hotp_empty_secret():
    """Test that an empty secret is rejected."""
    with pytest.raises(PreconditionError, match="non-empty"):
        generate_hotp(b"", 0)


def test_hotp_text_secret():
    """Test that a text secret is rejected instead of guessed at."""
    with pytest.raises(PreconditionError, match="non-empty bytes"):
        generate_hotp("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ", 0)


@pytest.mark.parametrize(
    "counter,digits",
    [(0, 6.0), (0, True), (0, "6"), (1.0, 6), (True, 6), ("1", 6)],
)
def test_hotp_non_integer_arguments(counter, digits):
    """Test that non-integer counters and digit counts are rejected."""
    with pytest.raises(PreconditionError, match="must be an integer"):
        generate_hotp(RFC4226_SECRET, counter, digits=digits)


@pytest.mark.parametrize("counter", [-1, MAX_COUNTER + 1])
def test_hotp_counter_out_of_range(counter):
    """Test that counters outside the unsigned 64-bit range are rejected."""
    with pytest.raises(PreconditionError, match="counter"):
        generate_hotp(RFC4226_SECRET, counter)


def test_hotp_counter_increment():
    """Test that different counters produce different codes."""
    code_0 = generate_hotp(RFC4226_SECRET, 0)
    code_1 = generate_hotp(RFC4226_SECRET, 1)
    code_2 = generate_hotp(RFC4226_SECRET, 2)

    assert code_0 != code_1
    assert code_1 != code_2
    assert code_0 != code_2

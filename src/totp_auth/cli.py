"""Command-line interface for totp-auth."""

import argparse
import logging
import sys
import time
from typing import List, Optional

from totp_auth.codec import decode_secret
from totp_auth.config import TotpConfig
from totp_auth.enrollment import Enrollment
from totp_auth.errors import TotpAuthError
from totp_auth.totp import generate_totp
from totp_auth.validator import Validator


def enroll_command(args: argparse.Namespace) -> int:
    """Handle the enroll command."""
    try:
        config = TotpConfig(
            digits=args.digits,
            step_seconds=args.period,
            secret_byte_length=args.bytes,
        )
        bundle = Enrollment(config).enroll(args.issuer, args.account)
    except TotpAuthError as e:
        print(f"✗ Enrollment failed: {e}", file=sys.stderr)
        return 2

    print(f"✓ Enrolled '{args.account}' for '{args.issuer}'")
    print(f"  Manual entry code: {bundle.manual_entry_code}")
    print(f"  Provisioning URI:  {bundle.provisioning_uri}")
    return 0


def code_command(args: argparse.Namespace) -> int:
    """Handle the code command."""
    try:
        secret = decode_secret(args.secret)
        code = generate_totp(secret, int(time.time()), args.period, args.digits)
    except TotpAuthError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 2

    print(code)
    return 0


def verify_command(args: argparse.Namespace) -> int:
    """Handle the verify command."""
    try:
        config = TotpConfig(digits=args.digits, step_seconds=args.period, window=args.window)
        result = Validator(config).check_encoded(args.secret, args.code)
    except TotpAuthError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 2

    print(result.value)
    return 0 if result.accepted else 1


def _add_code_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--digits",
        "-d",
        type=int,
        default=6,
        choices=[6, 7, 8],
        help="Number of digits in the code (default: 6)",
    )
    parser.add_argument(
        "--period",
        "-p",
        type=int,
        default=30,
        help="Time step in seconds (default: 30)",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="TOTP two-factor enrollment and code validation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Enroll command
    enroll_parser = subparsers.add_parser(
        "enroll",
        help="Generate a secret and provisioning URI for a new account",
    )
    enroll_parser.add_argument("--issuer", "-i", required=True, help="Issuer name")
    enroll_parser.add_argument("--account", "-a", required=True, help="Account label")
    enroll_parser.add_argument(
        "--bytes",
        "-b",
        type=int,
        default=10,
        help="Secret length in bytes (default: 10)",
    )
    _add_code_options(enroll_parser)

    # Code command
    code_parser = subparsers.add_parser(
        "code",
        aliases=["gen"],
        help="Print the current code for a base32 secret",
    )
    code_parser.add_argument("secret", help="Base32 secret")
    _add_code_options(code_parser)

    # Verify command
    verify_parser = subparsers.add_parser(
        "verify",
        help="Check a code against a base32 secret",
    )
    verify_parser.add_argument("secret", help="Base32 secret")
    verify_parser.add_argument("code", help="Code entered by the user")
    verify_parser.add_argument(
        "--window",
        "-w",
        type=int,
        default=1,
        help="Adjacent time steps accepted on each side (default: 1)",
    )
    _add_code_options(verify_parser)

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "enroll":
        return enroll_command(args)
    elif args.command in ("code", "gen"):
        return code_command(args)
    elif args.command == "verify":
        return verify_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())

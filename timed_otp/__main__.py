# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import argparse
import logging
import os
import sys

from timed_otp import CryptoUnavailable
from timed_otp import DEFAULT_SECRET_SIZE
from timed_otp import MalformedEncoding
from timed_otp import compute_token
from timed_otp import current_time_step
from timed_otp import format_token
from timed_otp import generate_secret
from timed_otp import seconds_remaining
from timed_otp import validate

_SECRET_ENV_NAME = 'TIMED_OTP_SECRET'


def _make_parser():
    parser = argparse.ArgumentParser(
        prog='timed_otp',
        description=(
            "time-based one-time passwords; "
            f"the secret is taken from the {_SECRET_ENV_NAME} environment variable"))
    parser.add_argument(
        '--debug', dest='logging_level',
        action='store_const', const=logging.DEBUG, default=logging.WARNING,
        help="Logging level; default: WARNING")
    commands = parser.add_subparsers(dest='command', required=True)
    generate_parser = commands.add_parser('generate', help="Print a new base-32 secret")
    generate_parser.add_argument(
        '--size',
        type=int, default=DEFAULT_SECRET_SIZE,
        help="Secret size in bytes; default: %(default)s")
    token_parser = commands.add_parser('token', help="Print the token for the current time")
    token_parser.add_argument(
        '--at-ms',
        type=int,
        help="Milliseconds since epoch to use instead of the current time")
    validate_parser = commands.add_parser('validate', help="Check a token; exit code 1 if invalid")
    validate_parser.add_argument('token', type=int)
    validate_parser.add_argument(
        '--at-ms',
        type=int,
        help="Milliseconds since epoch to use instead of the current time")
    return parser


def main(args):
    parser = _make_parser()
    parsed_args = parser.parse_args(args)
    logging.basicConfig(level=parsed_args.logging_level)
    if parsed_args.command == 'generate':
        if parsed_args.size < 1:
            parser.error("--size must be positive")
        print(generate_secret(parsed_args.size))
        return 0
    secret = os.environ.get(_SECRET_ENV_NAME)
    if not secret:
        parser.error(f"Set the secret in the {_SECRET_ENV_NAME} environment variable")
    try:
        if parsed_args.command == 'token':
            time_step = current_time_step(parsed_args.at_ms)
            token = compute_token(time_step, secret)
            remaining = seconds_remaining(parsed_args.at_ms)
            print(f"{format_token(token)} (valid for {remaining:.0f} s)")
            return 0
        if validate(parsed_args.token, secret, parsed_args.at_ms):
            _logger.info("Token %s accepted", format_token(parsed_args.token))
            print("valid")
            return 0
        _logger.info("Token %s rejected", format_token(parsed_args.token))
        print("invalid")
        return 1
    except (MalformedEncoding, CryptoUnavailable) as e:
        parser.error(f"Bad secret in {_SECRET_ENV_NAME}: {e}")


_logger = logging.getLogger(__name__)

if __name__ == '__main__':
    exit(main(sys.argv[1:]))

# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
from timed_otp._base32 import BASE32_ALPHABET
from timed_otp._base32 import BASE32_HEX_ALPHABET
from timed_otp._base32 import MalformedEncoding
from timed_otp._base32 import decode
from timed_otp._base32 import decode_to_bytes
from timed_otp._base32 import encode
from timed_otp._base32 import encode_to_string
from timed_otp._base32 import sanitize
from timed_otp._hmac import CryptoUnavailable
from timed_otp._hmac import digest
from timed_otp._time_step import Offset
from timed_otp._time_step import current_time_step
from timed_otp._time_step import seconds_remaining
from timed_otp._time_step import step_for
from timed_otp._tokens import DEFAULT_SECRET_SIZE
from timed_otp._tokens import compute_token
from timed_otp._tokens import format_token
from timed_otp._tokens import generate_secret
from timed_otp._tokens import validate
from timed_otp._truncation import truncate

__all__ = [
    'BASE32_ALPHABET',
    'BASE32_HEX_ALPHABET',
    'CryptoUnavailable',
    'DEFAULT_SECRET_SIZE',
    'MalformedEncoding',
    'Offset',
    'compute_token',
    'current_time_step',
    'decode',
    'decode_to_bytes',
    'digest',
    'encode',
    'encode_to_string',
    'format_token',
    'generate_secret',
    'sanitize',
    'seconds_remaining',
    'step_for',
    'truncate',
    'validate',
    ]

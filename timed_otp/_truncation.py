# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import logging

from timed_otp._hmac import DIGEST_SIZE

TRUNCATION_WIDTH = 4
TOKEN_DIGITS = 6
TOKEN_MODULUS = 10 ** TOKEN_DIGITS


def truncate(digest: bytes) -> int:
    """Reduce an HMAC-SHA1 digest to a 6-digit token (RFC 4226, section 5.3).

    The last nibble selects where the 4-byte window starts.
    The token is an integer; leading zeros are a display concern.

    >>> truncate(bytes.fromhex('1f8698690e02ca16618550ef7f19da8e945b555a'))
    872921
    """
    if len(digest) < DIGEST_SIZE:
        raise ValueError(f"Digest is {len(digest)} bytes long, expected {DIGEST_SIZE}")
    offset = digest[-1] & 0x0F
    _logger.debug("Dynamic truncation offset %d", offset)
    window = int.from_bytes(digest[offset:offset + TRUNCATION_WIDTH], 'big')
    return (window & 0x7FFFFFFF) % TOKEN_MODULUS


_logger = logging.getLogger(__name__)

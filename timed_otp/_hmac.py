# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import struct

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac

DIGEST_SIZE = 20
_COUNTER_MASK = 0xFFFFFFFFFFFFFFFF


class CryptoUnavailable(RuntimeError):
    pass


def counter_to_bytes(counter: int) -> bytes:
    """Serialize a time step as 8 bytes, most significant first.

    Values outside the unsigned 64-bit range wrap around.

    >>> counter_to_bytes(53082852).hex()
    '000000000329fae4'
    >>> counter_to_bytes(-1).hex()
    'ffffffffffffffff'
    """
    return struct.pack('>Q', counter & _COUNTER_MASK)


def digest(key: bytes, counter: int) -> bytes:
    """Compute HMAC-SHA1 of the counter.

    The hash is fixed: any other one changes every token.
    """
    if not key:
        raise CryptoUnavailable("HMAC key is empty")
    message = counter_to_bytes(counter)
    try:
        mac = hmac.HMAC(key, hashes.SHA1())
    except UnsupportedAlgorithm as e:
        raise CryptoUnavailable(f"HMAC-SHA1 is not available: {e}") from e
    mac.update(message)
    return mac.finalize()

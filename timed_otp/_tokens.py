# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import logging
import os
from typing import Callable
from typing import Optional

from timed_otp._base32 import decode_to_bytes
from timed_otp._base32 import encode_to_string
from timed_otp._hmac import digest
from timed_otp._time_step import Offset
from timed_otp._time_step import current_time_step
from timed_otp._truncation import TOKEN_DIGITS
from timed_otp._truncation import truncate

DEFAULT_SECRET_SIZE = 16
# More random bytes are drawn than kept.
RANDOM_BUFFER_MULTIPLIER = 8

_VALIDATION_ORDER = (Offset.PRESENT, Offset.PAST, Offset.FUTURE)


def generate_secret(
        size: int = DEFAULT_SECRET_SIZE,
        random_bytes: Callable[[int], bytes] = os.urandom,
        ) -> str:
    """Make a new base-32 secret.

    `random_bytes(n)` must return n bytes; the default is the OS CSPRNG.

    >>> generate_secret(5, lambda n: bytes(range(n)))
    'AAAQEAYE'
    """
    if size < 1:
        raise ValueError(f"Secret size must be positive, got {size}")
    buffer_size = size * RANDOM_BUFFER_MULTIPLIER
    buffer = random_bytes(buffer_size)
    if len(buffer) < buffer_size:
        raise ValueError(f"Random source returned {len(buffer)} bytes instead of {buffer_size}")
    _logger.debug("Generated secret of %d bytes: ***", size)
    return encode_to_string(buffer[:size])


def compute_token(time_step: int, secret: str) -> int:
    """Compute the token for a base-32 secret at a given time step.

    >>> compute_token(53082852, 'NOU4XWWCB4ZJOPNZRF6WRTFRMQ======')
    935619
    """
    key = bytearray(decode_to_bytes(secret))
    try:
        return _token_for_key(time_step, key)
    finally:
        _wipe(key)


def validate(candidate: int, secret: str, now_ms: Optional[int] = None) -> bool:
    """Check a token against the present step, then the previous one, then the next one.

    One step of skew each way is tolerated, so a token is accepted for up to 90 seconds.
    Tokens are not remembered: the same token passes again within the window.
    """
    key = bytearray(decode_to_bytes(secret))
    try:
        for offset in _VALIDATION_ORDER:
            time_step = current_time_step(now_ms, offset)
            if _token_for_key(time_step, key) == candidate:
                _logger.debug("Token matches %s step %d", offset.name, time_step)
                return True
        _logger.debug("Token does not match any of %s", [o.name for o in _VALIDATION_ORDER])
        return False
    finally:
        _wipe(key)


def format_token(token: int) -> str:
    """Zero-pad a token for display.

    >>> format_token(7123)
    '007123'
    """
    return str(token).zfill(TOKEN_DIGITS)


def _token_for_key(time_step: int, key: bytearray) -> int:
    return truncate(digest(key, time_step))


def _wipe(key: bytearray):
    key[:] = bytes(len(key))


_logger = logging.getLogger(__name__)

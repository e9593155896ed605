# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import logging
import time
from enum import Enum
from typing import Optional

STEP_MS = 30000


class Offset(Enum):
    PRESENT = 0
    PAST = -STEP_MS
    FUTURE = STEP_MS

    def __init__(self, shift_ms: int):
        self.shift_ms = shift_ms


def step_for(timestamp_ms: int, offset: Offset = Offset.PRESENT) -> int:
    """Map a timestamp (milliseconds since epoch) to a 30-second counter.

    >>> step_for(1592485571800)
    53082852
    >>> step_for(1592485571800, Offset.PAST)
    53082851
    >>> step_for(1592485571800, Offset.FUTURE)
    53082853
    """
    shifted_ms = timestamp_ms + offset.shift_ms
    step = (shifted_ms - shifted_ms % STEP_MS) // STEP_MS
    _logger.debug("Timestamp %d ms, offset %s: step %d", timestamp_ms, offset.name, step)
    return step


def current_time_step(now_ms: Optional[int] = None, offset: Offset = Offset.PRESENT) -> int:
    if now_ms is None:
        now_ms = _now_ms()
    return step_for(now_ms, offset)


def seconds_remaining(now_ms: Optional[int] = None) -> float:
    """Time left until the present step is over.

    >>> seconds_remaining(1592485571800)
    18.2
    """
    if now_ms is None:
        now_ms = _now_ms()
    return (STEP_MS - now_ms % STEP_MS) / 1000


def _now_ms() -> int:
    return int(time.time() * 1000)


_logger = logging.getLogger(__name__)

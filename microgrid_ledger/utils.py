"""
Checked integer arithmetic and clock helpers shared by the ledger components.
"""

import datetime
import threading
from functools import partial
from typing import Callable, Optional

from .exceptions import ArithmeticOverflow, InvalidAmount, ZeroAmount
from .settings import settings

utc_datetime_now = partial(datetime.datetime.now, datetime.timezone.utc)


def checked_add(a: int, b: int, limit: Optional[int] = None, operation: str = "add") -> int:
    """
    Add two non-negative integers, raising instead of exceeding the limit.

    Args:
        a: Left operand
        b: Right operand
        limit: Largest representable value (defaults to settings.MAX_UINT)
        operation: Label used in the overflow error

    Returns:
        The sum

    Raises:
        ArithmeticOverflow: If the sum exceeds the limit
    """
    limit = settings.MAX_UINT if limit is None else limit
    result = a + b
    if result > limit:
        raise ArithmeticOverflow(operation, limit)
    return result


def checked_mul(a: int, b: int, limit: Optional[int] = None, operation: str = "mul") -> int:
    """Multiply two non-negative integers with the same bound as checked_add."""
    limit = settings.MAX_UINT if limit is None else limit
    result = a * b
    if result > limit:
        raise ArithmeticOverflow(operation, limit)
    return result


def require_energy_amount(amount) -> int:
    """
    Reject anything but a strictly positive int.

    bool is an int subclass and is rejected with the other non-integers.

    Raises:
        InvalidAmount: If amount is not an int
        ZeroAmount: If amount is not positive
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmount(amount)
    if amount <= 0:
        raise ZeroAmount(amount)
    return amount


class MonotonicClock:
    """
    Wraps a time source so that successive readings never go backwards.

    If the underlying source steps back (NTP adjustment, manual clock change)
    the last reading is repeated until the source catches up.
    """

    def __init__(self, source: Callable[[], datetime.datetime] = utc_datetime_now):
        self._source = source
        self._last: Optional[datetime.datetime] = None
        self._lock = threading.Lock()

    def __call__(self) -> datetime.datetime:
        with self._lock:
            now = self._source()
            if self._last is not None and now < self._last:
                now = self._last
            self._last = now
            return now

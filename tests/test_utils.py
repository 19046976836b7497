import datetime

import pytest

from microgrid_ledger.exceptions import ArithmeticOverflow, ErrorKind
from microgrid_ledger.settings import settings
from microgrid_ledger.utils import MonotonicClock, checked_add, checked_mul


class TestCheckedArithmetic:
    def test_within_limit(self):
        assert checked_add(2, 3, limit=5) == 5
        assert checked_mul(4, 5, limit=20) == 20

    def test_add_overflow(self):
        with pytest.raises(ArithmeticOverflow) as exc_info:
            checked_add(3, 3, limit=5, operation="credit_balance")

        assert exc_info.value.kind == ErrorKind.OVERFLOW
        assert exc_info.value.operation == "credit_balance"

    def test_mul_overflow(self):
        with pytest.raises(ArithmeticOverflow):
            checked_mul(3, 3, limit=8)

    def test_default_limit_is_uint256(self):
        assert settings.MAX_UINT == 2**256 - 1
        assert checked_add(settings.MAX_UINT - 1, 1) == settings.MAX_UINT
        with pytest.raises(ArithmeticOverflow):
            checked_add(settings.MAX_UINT, 1)


class TestMonotonicClock:
    def test_never_goes_backwards(self):
        base = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)
        readings = iter([
            base,
            base + datetime.timedelta(seconds=5),
            base + datetime.timedelta(seconds=2),
            base + datetime.timedelta(seconds=7),
        ])
        clock = MonotonicClock(lambda: next(readings))

        values = [clock() for _ in range(4)]

        assert values == sorted(values)
        assert values[2] == base + datetime.timedelta(seconds=5)
        assert values[3] == base + datetime.timedelta(seconds=7)

    def test_default_source_is_timezone_aware(self):
        assert MonotonicClock()().tzinfo is not None

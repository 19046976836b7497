import datetime

import pytest
from pydantic import ValidationError

from microgrid_ledger.exceptions import ErrorKind, TransactionOutOfRange
from microgrid_ledger.transactions import TRANSACTION_COLUMNS, TransactionLog

TIMESTAMP = datetime.datetime(2024, 6, 1, 12, tzinfo=datetime.timezone.utc)


@pytest.fixture()
def log() -> TransactionLog:
    return TransactionLog()


class TestTransactionLog:
    def test_append_assigns_length_as_id(self, log):
        assert log.length() == 0

        first = log.append("alice", "bob", 2, 20, TIMESTAMP)
        second = log.append("bob", "alice", 1, 10, TIMESTAMP)

        assert (first, second) == (0, 1)
        assert log.length() == 2
        assert len(log) == 2

    def test_get(self, log):
        log.append("alice", "bob", 2, 20, TIMESTAMP)

        tx = log.get(0)

        assert tx.transaction_id == 0
        assert tx.seller == "alice"
        assert tx.buyer == "bob"
        assert tx.energy_amount == 2
        assert tx.credit_amount == 20
        assert tx.timestamp == TIMESTAMP
        assert tx.completed is True

    @pytest.mark.parametrize("transaction_id", [0, 1, -1])
    def test_get_out_of_range(self, log, transaction_id):
        with pytest.raises(TransactionOutOfRange) as exc_info:
            log.get(transaction_id)

        assert exc_info.value.kind == ErrorKind.OUT_OF_RANGE
        assert exc_info.value.length == 0

    def test_transactions_are_immutable(self, log):
        log.append("alice", "bob", 2, 20, TIMESTAMP)

        with pytest.raises(ValidationError):
            log.get(0).credit_amount = 1000

        assert log.get(0).credit_amount == 20

    def test_self_trade_record_rejected(self, log):
        with pytest.raises(ValidationError):
            log.append("alice", "alice", 2, 20, TIMESTAMP)

        assert log.length() == 0

    def test_by_node(self, log):
        log.append("alice", "bob", 1, 10, TIMESTAMP)
        log.append("carol", "bob", 1, 10, TIMESTAMP)
        log.append("carol", "alice", 1, 10, TIMESTAMP)

        assert [tx.transaction_id for tx in log.by_node("alice")] == [0, 2]
        assert [tx.transaction_id for tx in log.by_node("bob")] == [0, 1]
        assert log.by_node("dave") == []

    def test_to_dataframe(self, log):
        log.append("alice", "bob", 2, 20, TIMESTAMP)
        log.append("bob", "alice", 1, 10, TIMESTAMP)

        df = log.to_dataframe()

        assert list(df.columns) == TRANSACTION_COLUMNS
        assert len(df) == 2
        assert df["credit_amount"].sum() == 30
        assert list(df["seller"]) == ["alice", "bob"]

    def test_empty_dataframe(self, log):
        df = log.to_dataframe()

        assert list(df.columns) == TRANSACTION_COLUMNS
        assert df.empty

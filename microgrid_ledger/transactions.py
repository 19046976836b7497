"""
Transaction Log

Append-only record of completed trades, indexed by sequential id.
"""

from datetime import datetime
from typing import Iterator, List

import pandas as pd

from .exceptions import TransactionOutOfRange
from .models import Transaction

TRANSACTION_COLUMNS = [
    'transaction_id',
    'seller',
    'buyer',
    'energy_amount',
    'credit_amount',
    'timestamp',
    'completed',
]


class TransactionLog:
    """Ordered log of trades"""

    def __init__(self):
        self._transactions: List[Transaction] = []

    def append(
        self,
        seller: str,
        buyer: str,
        energy_amount: int,
        credit_amount: int,
        timestamp: datetime,
    ) -> int:
        """
        Store a completed trade.

        Returns:
            The new transaction id, equal to the log length before the append
        """
        transaction_id = len(self._transactions)
        tx = Transaction(
            transaction_id=transaction_id,
            seller=seller,
            buyer=buyer,
            energy_amount=energy_amount,
            credit_amount=credit_amount,
            timestamp=timestamp,
        )
        self._transactions.append(tx)
        return transaction_id

    def get(self, transaction_id: int) -> Transaction:
        """Get a transaction by id"""
        if transaction_id < 0 or transaction_id >= len(self._transactions):
            raise TransactionOutOfRange(transaction_id, len(self._transactions))
        return self._transactions[transaction_id]

    def length(self) -> int:
        return len(self._transactions)

    def by_node(self, identity: str) -> List[Transaction]:
        """Get all trades in which a node was seller or buyer"""
        return [
            tx for tx in self._transactions
            if tx.seller == identity or tx.buyer == identity
        ]

    def to_dataframe(self) -> pd.DataFrame:
        """Export the log as a DataFrame, one row per transaction"""
        if not self._transactions:
            return pd.DataFrame(columns=TRANSACTION_COLUMNS)
        df = pd.DataFrame([tx.model_dump() for tx in self._transactions], columns=TRANSACTION_COLUMNS)
        df['timestamp'] = pd.to_datetime(df['timestamp'])
        return df

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(list(self._transactions))

"""
Microgrid Ledger Service

Holds the registry, credit ledger, transaction log and event queue as one
state object. Every state-changing call runs under a single lock: validate,
mutate, append, enqueue events, release. Events are delivered to sinks after
the lock is released, in commit order.
"""

import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, List, Optional

from .events import EventQueue, EventSink
from .ledger import CreditLedger
from .models import LedgerStats, NodeView, Transaction
from .registry import NodeRegistry
from .settings import settings
from .trading import TradeEngine
from .transactions import TransactionLog
from .utils import MonotonicClock

logger = logging.getLogger(__name__)


class MicrogridLedger:
    """Single-ledger accounting engine for a microgrid"""

    def __init__(
        self,
        owner: Optional[str] = None,
        rate: Optional[int] = None,
        clock: Optional[Callable[[], datetime]] = None,
        max_value: Optional[int] = None,
        events: Optional[EventQueue] = None,
    ):
        """
        Initialize the ledger service.

        Args:
            owner: Admin principal (defaults to settings.OWNER_IDENTITY)
            rate: Credits per energy unit (defaults to settings.CREDIT_RATE)
            clock: Timestamp source, wrapped so it never goes backwards
            max_value: Accumulator bound (defaults to settings.MAX_UINT)
            events: Outbound event queue (defaults to one keeping
                settings.EVENT_HISTORY_LIMIT delivered events)
        """
        self.owner = owner if owner is not None else settings.OWNER_IDENTITY
        self.clock = MonotonicClock(clock) if clock is not None else MonotonicClock()
        self.max_value = max_value if max_value is not None else settings.MAX_UINT
        self.events = (
            events if events is not None
            else EventQueue(max_history=settings.EVENT_HISTORY_LIMIT)
        )

        self.registry = NodeRegistry(
            owner=self.owner, clock=self.clock, events=self.events, max_value=self.max_value
        )
        self.ledger = CreditLedger(
            self.registry,
            rate=rate if rate is not None else settings.CREDIT_RATE,
            events=self.events,
            max_value=self.max_value,
        )
        self.log = TransactionLog()
        self.trading = TradeEngine(self.registry, self.ledger, self.log, self.clock)

        self._lock = threading.RLock()

    @property
    def rate(self) -> int:
        return self.ledger.rate

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        with self._lock:
            yield
        self.events.deliver()

    def subscribe(self, sink: EventSink) -> None:
        self.events.subscribe(sink)

    # State-changing operations

    def register_node(self, identity: str, name: str) -> NodeView:
        with self._exclusive():
            return self.registry.register(identity, name)

    def record_production(self, identity: str, energy_amount: int) -> int:
        """Mint credits for production reported by the node itself"""
        with self._exclusive():
            return self.ledger.mint(identity, energy_amount)

    def trade(self, seller: str, buyer: str, energy_amount: int) -> int:
        with self._exclusive():
            return self.trading.trade(seller, buyer, energy_amount)

    def set_active(self, caller: str, identity: str, value: bool) -> NodeView:
        with self._exclusive():
            return self.registry.set_active(caller, identity, value)

    # Queries

    def get_node(self, identity: str) -> NodeView:
        with self._lock:
            return self.registry.get(identity)

    def get_transaction(self, transaction_id: int) -> Transaction:
        with self._lock:
            return self.trading.get_trade(transaction_id)

    def get_active_node_count(self) -> int:
        with self._lock:
            return self.registry.active_count()

    def get_stats(self) -> LedgerStats:
        with self._lock:
            return LedgerStats(
                node_count=self.registry.node_count,
                total_credits=self.ledger.total_credits,
                transaction_count=self.log.length(),
            )

    def list_nodes(self) -> List[NodeView]:
        with self._lock:
            return self.registry.nodes()

    def get_trades_by_node(self, identity: str) -> List[Transaction]:
        with self._lock:
            self.registry.get(identity)
            return self.trading.get_trades_by_node(identity)

    def get_trading_statistics(self) -> Dict[str, Any]:
        with self._lock:
            return self.trading.get_trading_statistics()

    def get_statistics(self) -> Dict[str, Any]:
        """Registry, ledger and trading statistics in one snapshot"""
        with self._lock:
            stats = self.registry.get_statistics()
            stats.update({
                'total_credits': self.ledger.total_credits,
                'credit_rate': self.ledger.rate,
                'transaction_count': self.log.length(),
            })
            return {
                'ledger': stats,
                'trading': self.trading.get_trading_statistics(),
            }

    @contextmanager
    def snapshot(self) -> Iterator["MicrogridLedger"]:
        """Hold the state lock for a consistent multi-field read"""
        with self._lock:
            yield self

"""
Energy Trading

Executes atomic two-party trades: credits move from seller to buyer, the
buyer's consumption grows, and the trade is appended to the transaction log.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from .exceptions import (
    BuyerInactive,
    BuyerUnknown,
    SelfTrade,
    SellerInactive,
    SellerUnknown,
)
from .ledger import CreditLedger
from .models import CreditTransfer, EnergyTraded, Transaction
from .registry import NodeRegistry
from .transactions import TransactionLog
from .utils import checked_add, require_energy_amount

logger = logging.getLogger(__name__)


class TradeEngine:
    """Manages energy trading between nodes"""

    def __init__(
        self,
        registry: NodeRegistry,
        ledger: CreditLedger,
        log: Optional[TransactionLog] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize trading engine.

        Args:
            registry: Node registry instance
            ledger: Credit ledger holding the conversion rate
            log: Transaction log to append settled trades to
            clock: Timestamp source (defaults to the registry's)
        """
        self.registry = registry
        self.ledger = ledger
        self.log = log if log is not None else TransactionLog()
        self.clock = clock or registry.clock
        self.events = ledger.events

    def trade(self, seller: str, buyer: str, energy_amount: int) -> int:
        """
        Sell energy from one node to another.

        Every check runs before the first mutation, so a rejected trade leaves
        balances, consumption counters and the log exactly as they were.

        Args:
            seller: Identity whose credits are debited
            buyer: Identity whose credits are credited and consumption recorded
            energy_amount: Energy units traded

        Returns:
            Id of the new transaction
        """
        if seller == buyer:
            raise SelfTrade(seller)
        require_energy_amount(energy_amount)

        buyer_node = self.registry.get_record(buyer, not_found=BuyerUnknown)
        seller_node = self.registry.get_record(seller, not_found=SellerUnknown)
        if not seller_node.active:
            raise SellerInactive(seller)
        if not buyer_node.active:
            raise BuyerInactive(buyer)

        credit_amount = self.ledger.credits_for(energy_amount)
        self.ledger.check_transfer(seller_node, buyer_node, credit_amount)
        energy_consumed = checked_add(
            buyer_node.energy_consumed, energy_amount, self.ledger.max_value, "energy_consumed"
        )
        timestamp = self.clock()
        events = [
            EnergyTraded(
                seller=seller,
                buyer=buyer,
                energy_amount=energy_amount,
                credit_amount=credit_amount,
            ),
            CreditTransfer(from_identity=seller, to_identity=buyer, amount=credit_amount),
        ]

        # Validated; nothing below can fail
        self.ledger.transfer(seller, buyer, credit_amount)
        buyer_node.energy_consumed = energy_consumed
        transaction_id = self.log.append(
            seller=seller,
            buyer=buyer,
            energy_amount=energy_amount,
            credit_amount=credit_amount,
            timestamp=timestamp,
        )
        for event in events:
            self.events.emit(event)
        logger.info(
            "Trade %s settled: %s -> %s, %s energy for %s credits",
            transaction_id, seller, buyer, energy_amount, credit_amount,
        )
        return transaction_id

    def get_trade(self, transaction_id: int) -> Transaction:
        return self.log.get(transaction_id)

    def get_trades_by_node(self, identity: str) -> List[Transaction]:
        """Get all trades involving a node"""
        return self.log.by_node(identity)

    def get_trading_statistics(self) -> Dict[str, Any]:
        """Get trading statistics"""
        total_trades = len(self.log)
        total_energy_traded = sum(tx.energy_amount for tx in self.log)
        total_credits_traded = sum(tx.credit_amount for tx in self.log)
        participants = {tx.seller for tx in self.log} | {tx.buyer for tx in self.log}

        return {
            'total_trades': total_trades,
            'total_energy_traded': total_energy_traded,
            'total_credits_traded': total_credits_traded,
            'unique_participants': len(participants),
            'average_energy_per_trade': (
                total_energy_traded / total_trades if total_trades > 0 else None
            ),
        }

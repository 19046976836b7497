"""
Ledger Validation

Audits a ledger against its accounting invariants.
"""

from typing import Any, Dict, List

from .models import EventType, NodeView, Transaction
from .service import MicrogridLedger


class LedgerValidator:
    """Checks conservation and log integrity of a ledger"""

    def validate(self, ledger: MicrogridLedger) -> Dict[str, Any]:
        """
        Validate a ledger in a single consistent snapshot.

        Args:
            ledger: Ledger to audit

        Returns:
            Dictionary with validation results
        """
        with ledger.snapshot():
            nodes = ledger.registry.nodes()
            transactions = list(ledger.log)
            total_credits = ledger.ledger.total_credits
            node_count = ledger.registry.node_count
            history = ledger.events.history()
            history_limit = ledger.events.max_history
            rate = ledger.rate

        errors: List[str] = []
        warnings: List[str] = []

        errors.extend(self.validate_conservation(nodes, total_credits))

        minted = sum(
            e.credits_earned for e in history if e.event_type == EventType.ENERGY_PRODUCED
        )
        if history_limit is not None and len(history) >= history_limit:
            warnings.append(
                f"Event history holds only the last {history_limit} events; "
                f"minted credits not cross-checked"
            )
        elif minted != total_credits:
            warnings.append(
                f"Minted credits in event history ({minted}) differ from "
                f"total credits ({total_credits})"
            )

        if node_count != len(nodes):
            errors.append(
                f"Node count mismatch: counter={node_count}, registered={len(nodes)}"
            )

        errors.extend(self.validate_transactions(transactions, rate))

        inactive = [n.identity for n in nodes if not n.active]
        if inactive:
            warnings.append(f"{len(inactive)} nodes are inactive")

        return {
            'valid': len(errors) == 0,
            'errors': errors,
            'warnings': warnings,
            'total_credits': total_credits,
            'total_balances': sum(n.credit_balance for n in nodes),
            'total_transactions': len(transactions),
        }

    def validate_conservation(self, nodes: List[NodeView], total_credits: int) -> List[str]:
        """Sum of balances must equal the credits minted so far"""
        errors = []
        total_balances = sum(n.credit_balance for n in nodes)
        if total_balances != total_credits:
            errors.append(
                f"Conservation violated: balances={total_balances}, "
                f"total_credits={total_credits}"
            )
        for node in nodes:
            if node.credit_balance < 0:
                errors.append(f"Node {node.identity} has a negative balance")
        return errors

    def validate_transactions(self, transactions: List[Transaction], rate: int) -> List[str]:
        """Ids must be sequential from 0 and amounts consistent with the rate"""
        errors = []
        for index, tx in enumerate(transactions):
            if tx.transaction_id != index:
                errors.append(
                    f"Transaction at position {index} has id {tx.transaction_id}"
                )
            if tx.seller == tx.buyer:
                errors.append(f"Transaction {tx.transaction_id} is a self-trade")
            if tx.credit_amount != tx.energy_amount * rate:
                errors.append(
                    f"Transaction {tx.transaction_id}: credit amount {tx.credit_amount} "
                    f"does not match {tx.energy_amount} energy at rate {rate}"
                )
            if not tx.completed:
                errors.append(f"Transaction {tx.transaction_id} is not completed")
        return errors

"""
Credit Ledger

Single source of truth for the energy to credit conversion and for balance
mutation. Credits enter the system only through mint; transfer moves them
between nodes without changing total_credits.
"""

import logging
from typing import Optional

from .events import EventQueue
from .exceptions import InsufficientBalance
from .models import EnergyProduced, Node
from .registry import NodeRegistry
from .utils import checked_add, checked_mul, require_energy_amount

logger = logging.getLogger(__name__)


class CreditLedger:
    """Mints and moves credits"""

    def __init__(
        self,
        registry: NodeRegistry,
        rate: int = 10,
        events: Optional[EventQueue] = None,
        max_value: Optional[int] = None,
    ):
        """
        Initialize the ledger.

        Args:
            registry: Registry holding the node records
            rate: Credits issued per unit of energy
            events: Outbound event queue (defaults to the registry's)
            max_value: Upper bound for every accumulator
        """
        if isinstance(rate, bool) or not isinstance(rate, int) or rate <= 0:
            raise ValueError(f"Credit rate must be a positive integer, got {rate!r}")
        self.registry = registry
        self.rate = rate
        self.events = events if events is not None else registry.events
        self.max_value = max_value if max_value is not None else registry.max_value
        self.total_credits = 0

    def credits_for(self, energy_amount: int) -> int:
        """Convert an energy amount to credits at the current rate"""
        return checked_mul(energy_amount, self.rate, self.max_value, "credit conversion")

    def mint(self, identity: str, energy_amount: int) -> int:
        """
        Record claimed production and issue credits for it.

        The production claim is not verified here.

        Args:
            identity: Producing node
            energy_amount: Energy units produced

        Returns:
            Credits earned

        Raises:
            InvalidAmount: If energy_amount is not an integer
            ZeroAmount: If energy_amount is not positive
            NodeNotFound: If the node is unknown
            NodeInactive: If the node is deactivated
            ArithmeticOverflow: If any accumulator would overflow
        """
        require_energy_amount(energy_amount)
        node = self.registry.require_registered_and_active(identity)

        credits = self.credits_for(energy_amount)
        energy_generated = checked_add(
            node.energy_generated, energy_amount, self.max_value, "energy_generated"
        )
        credit_balance = checked_add(
            node.credit_balance, credits, self.max_value, "credit_balance"
        )
        total_credits = checked_add(
            self.total_credits, credits, self.max_value, "total_credits"
        )
        event = EnergyProduced(identity=identity, amount=energy_amount, credits_earned=credits)

        node.energy_generated = energy_generated
        node.credit_balance = credit_balance
        self.total_credits = total_credits
        self.events.emit(event)
        logger.info("Minted %s credits to %s for %s energy", credits, identity, energy_amount)
        return credits

    def check_transfer(self, sender: Node, recipient: Node, credit_amount: int) -> int:
        """
        Validate a transfer without applying it.

        Returns:
            The recipient's balance after the transfer
        """
        if sender.credit_balance < credit_amount:
            raise InsufficientBalance(sender.identity, credit_amount, sender.credit_balance)
        return checked_add(
            recipient.credit_balance, credit_amount, self.max_value, "credit_balance"
        )

    def transfer(self, from_identity: str, to_identity: str, credit_amount: int) -> None:
        """
        Move credits between two registered nodes.

        Both balances change or neither does; total_credits is unchanged.

        Raises:
            NodeNotFound: If either node is unknown
            InsufficientBalance: If the sender cannot cover the amount
        """
        if credit_amount < 0:
            raise ValueError(f"Credit amount must not be negative, got {credit_amount}")
        sender = self.registry.get_record(from_identity)
        recipient = self.registry.get_record(to_identity)
        recipient_balance = self.check_transfer(sender, recipient, credit_amount)
        if sender is recipient:
            return

        sender.credit_balance -= credit_amount
        recipient.credit_balance = recipient_balance
        logger.debug("Transferred %s credits %s -> %s", credit_amount, from_identity, to_identity)

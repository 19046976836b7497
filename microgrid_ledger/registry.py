"""
Node Registry

Owns the set of registered nodes and their mutable accounting state.
"""

import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional, Type

from .events import EventQueue
from .exceptions import (
    AlreadyRegistered,
    EmptyName,
    NodeInactive,
    NodeNotFound,
    Unauthorized,
)
from .models import Node, NodeRegistered, NodeView
from .utils import MonotonicClock, checked_add

logger = logging.getLogger(__name__)


class NodeRegistry:
    """Registry of microgrid participants"""

    def __init__(
        self,
        owner: str,
        clock: Optional[Callable[[], datetime]] = None,
        events: Optional[EventQueue] = None,
        max_value: Optional[int] = None,
    ):
        """
        Initialize the registry.

        Args:
            owner: The single principal allowed to toggle node activation
            clock: Timestamp source for registered_at
            events: Outbound event queue
            max_value: Upper bound for the node counter
        """
        self.owner = owner
        self.clock = clock or MonotonicClock()
        self.events = events if events is not None else EventQueue()
        self.max_value = max_value
        self._nodes: Dict[str, Node] = {}
        # Registration order; identities are never removed
        self._order: List[str] = []
        self.node_count = 0

    def register(self, identity: str, name: str) -> NodeView:
        """
        Register a new node.

        Args:
            identity: Caller principal
            name: Display name

        Returns:
            Snapshot of the new node

        Raises:
            AlreadyRegistered: If the identity is already present
            EmptyName: If the name is empty or blank
        """
        if identity in self._nodes:
            raise AlreadyRegistered(identity)
        if not name or not name.strip():
            raise EmptyName(identity)

        node_count = checked_add(self.node_count, 1, self.max_value, "node_count")

        node = Node(identity=identity, name=name, registered_at=self.clock())
        self._nodes[identity] = node
        self._order.append(identity)
        self.node_count = node_count

        self.events.emit(NodeRegistered(identity=identity, name=name))
        logger.info("Registered node %s (%s)", identity, name)
        return node.view()

    def set_active(self, caller: str, identity: str, value: bool) -> NodeView:
        """
        Set a node's participation flag. Owner only.

        Balances and trade history are left untouched.
        """
        if caller != self.owner:
            raise Unauthorized(caller)
        node = self.get_record(identity)
        node.active = value
        logger.info("Node %s active=%s", identity, value)
        return node.view()

    def get(self, identity: str) -> NodeView:
        """Get a read-only snapshot of a node"""
        return self.get_record(identity).view()

    def get_record(
        self,
        identity: str,
        not_found: Type[NodeNotFound] = NodeNotFound,
    ) -> Node:
        """Get the mutable record of a node, for use by the credit ledger"""
        node = self._nodes.get(identity)
        if node is None:
            raise not_found(identity)
        return node

    def require_registered_and_active(
        self,
        identity: str,
        not_found: Type[NodeNotFound] = NodeNotFound,
        inactive: Type[NodeInactive] = NodeInactive,
    ) -> Node:
        """
        Guard used before minting and trading.

        Args:
            identity: Node to check
            not_found: Error raised for an unknown identity
            inactive: Error raised for a deactivated node

        Returns:
            The mutable node record
        """
        node = self.get_record(identity, not_found)
        if not node.active:
            raise inactive(identity)
        return node

    def is_registered(self, identity: str) -> bool:
        return identity in self._nodes

    def identities(self) -> List[str]:
        """Registered identities in registration order"""
        return list(self._order)

    def nodes(self) -> List[NodeView]:
        return [self._nodes[identity].view() for identity in self._order]

    def active_count(self) -> int:
        return sum(1 for node in self._nodes.values() if node.active)

    def total_balance(self) -> int:
        return sum(node.credit_balance for node in self._nodes.values())

    def get_statistics(self) -> Dict[str, int]:
        """Get registry statistics"""
        return {
            'node_count': self.node_count,
            'active_nodes': self.active_count(),
            'inactive_nodes': self.node_count - self.active_count(),
            'total_energy_generated': sum(n.energy_generated for n in self._nodes.values()),
            'total_energy_consumed': sum(n.energy_consumed for n in self._nodes.values()),
        }

    def __len__(self) -> int:
        return len(self._nodes)

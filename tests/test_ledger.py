import pytest
from pydantic import ValidationError

from microgrid_ledger.events import EventQueue
from microgrid_ledger.exceptions import (
    ArithmeticOverflow,
    ErrorKind,
    InsufficientBalance,
    InvalidAmount,
    NodeInactive,
    NodeNotFound,
    ZeroAmount,
)
from microgrid_ledger.ledger import CreditLedger
from microgrid_ledger.models import EventType
from microgrid_ledger.registry import NodeRegistry


@pytest.fixture()
def registry(clock) -> NodeRegistry:
    registry = NodeRegistry(owner="owner", clock=clock, events=EventQueue())
    registry.register("alice", "Alice")
    registry.register("bob", "Bob")
    return registry


@pytest.fixture()
def credit_ledger(registry) -> CreditLedger:
    return CreditLedger(registry, rate=10)


class TestMint:
    def test_mint_issues_credits_at_rate(self, credit_ledger, registry):
        credits = credit_ledger.mint("alice", 5)

        assert credits == 50
        node = registry.get("alice")
        assert node.energy_generated == 5
        assert node.credit_balance == 50
        assert credit_ledger.total_credits == 50

    def test_mint_accumulates(self, credit_ledger, registry):
        credit_ledger.mint("alice", 5)
        credit_ledger.mint("alice", 2)
        credit_ledger.mint("bob", 1)

        assert registry.get("alice").credit_balance == 70
        assert registry.get("alice").energy_generated == 7
        assert credit_ledger.total_credits == 80

    def test_mint_emits_event(self, credit_ledger):
        credit_ledger.mint("alice", 3)

        events = credit_ledger.events.history(EventType.ENERGY_PRODUCED)
        assert len(events) == 1
        assert events[0].identity == "alice"
        assert events[0].amount == 3
        assert events[0].credits_earned == 30

    @pytest.mark.parametrize("amount", [0, -1])
    def test_mint_rejects_non_positive_amount(self, credit_ledger, amount):
        with pytest.raises(ZeroAmount):
            credit_ledger.mint("alice", amount)

        assert credit_ledger.total_credits == 0

    @pytest.mark.parametrize("amount", [0.5, 2.0, True, "3"])
    def test_mint_rejects_non_integer_amount(self, credit_ledger, registry, amount):
        with pytest.raises(InvalidAmount) as exc_info:
            credit_ledger.mint("alice", amount)

        assert exc_info.value.kind == ErrorKind.INVALID_AMOUNT
        node = registry.get("alice")
        assert node.energy_generated == 0
        assert node.credit_balance == 0
        assert credit_ledger.total_credits == 0
        assert credit_ledger.events.history(EventType.ENERGY_PRODUCED) == []

    def test_node_record_rejects_fractional_balance(self, registry):
        with pytest.raises(ValidationError):
            registry.get_record("alice").credit_balance = 1.5

        assert registry.get("alice").credit_balance == 0

    def test_mint_rejects_inactive_node(self, credit_ledger, registry):
        registry.set_active("owner", "alice", False)

        with pytest.raises(NodeInactive):
            credit_ledger.mint("alice", 5)

        assert registry.get("alice").credit_balance == 0
        assert credit_ledger.events.history(EventType.ENERGY_PRODUCED) == []

    def test_mint_rejects_unknown_node(self, credit_ledger):
        with pytest.raises(NodeNotFound):
            credit_ledger.mint("nobody", 5)

    def test_custom_rate(self, registry):
        credit_ledger = CreditLedger(registry, rate=3)

        assert credit_ledger.mint("alice", 4) == 12
        assert credit_ledger.total_credits == 12

    @pytest.mark.parametrize("rate", [0, -10, 1.5, True])
    def test_rate_must_be_positive_integer(self, registry, rate):
        with pytest.raises(ValueError):
            CreditLedger(registry, rate=rate)


class TestOverflow:
    def test_overflow_leaves_node_untouched(self, clock):
        registry = NodeRegistry(owner="owner", clock=clock, max_value=100)
        registry.register("alice", "Alice")
        credit_ledger = CreditLedger(registry, rate=10)
        credit_ledger.mint("alice", 9)

        with pytest.raises(ArithmeticOverflow):
            credit_ledger.mint("alice", 2)

        node = registry.get("alice")
        assert node.energy_generated == 9
        assert node.credit_balance == 90
        assert credit_ledger.total_credits == 90

    def test_conversion_overflow(self, clock):
        registry = NodeRegistry(owner="owner", clock=clock, max_value=100)
        registry.register("alice", "Alice")
        credit_ledger = CreditLedger(registry, rate=10)

        with pytest.raises(ArithmeticOverflow):
            credit_ledger.credits_for(11)


class TestTransfer:
    def test_transfer_moves_credits(self, credit_ledger, registry):
        credit_ledger.mint("alice", 5)

        credit_ledger.transfer("alice", "bob", 20)

        assert registry.get("alice").credit_balance == 30
        assert registry.get("bob").credit_balance == 20
        assert credit_ledger.total_credits == 50

    def test_transfer_whole_balance(self, credit_ledger, registry):
        credit_ledger.mint("alice", 5)

        credit_ledger.transfer("alice", "bob", 50)

        assert registry.get("alice").credit_balance == 0
        assert registry.get("bob").credit_balance == 50

    def test_transfer_insufficient_balance(self, credit_ledger, registry):
        credit_ledger.mint("alice", 1)

        with pytest.raises(InsufficientBalance) as exc_info:
            credit_ledger.transfer("alice", "bob", 20)

        assert exc_info.value.requested == 20
        assert exc_info.value.available == 10
        assert registry.get("alice").credit_balance == 10
        assert registry.get("bob").credit_balance == 0

    def test_transfer_never_changes_total(self, credit_ledger):
        credit_ledger.mint("alice", 5)
        credit_ledger.mint("bob", 5)

        credit_ledger.transfer("alice", "bob", 30)
        credit_ledger.transfer("bob", "alice", 70)

        assert credit_ledger.total_credits == 100
        assert credit_ledger.registry.total_balance() == 100

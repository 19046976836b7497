import datetime
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from microgrid_ledger.api import app, get_ledger
from microgrid_ledger.service import MicrogridLedger

OWNER = "owner"


class StepClock:
    """Deterministic clock advancing one second per reading"""

    def __init__(self, start: datetime.datetime | None = None):
        self.current = start or datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)

    def __call__(self) -> datetime.datetime:
        now = self.current
        self.current = now + datetime.timedelta(seconds=1)
        return now


@pytest.fixture()
def clock() -> StepClock:
    return StepClock()


@pytest.fixture()
def ledger(clock: StepClock) -> MicrogridLedger:
    return MicrogridLedger(owner=OWNER, rate=10, clock=clock)


@pytest.fixture()
def alice_and_bob(ledger: MicrogridLedger) -> MicrogridLedger:
    ledger.register_node("alice", "Alice")
    ledger.register_node("bob", "Bob")
    return ledger


@pytest.fixture()
def funded_ledger(alice_and_bob: MicrogridLedger) -> MicrogridLedger:
    """Alice holds 50 credits from 5 units of production"""
    alice_and_bob.record_production("alice", 5)
    return alice_and_bob


@pytest.fixture()
def api_client(ledger: MicrogridLedger) -> Generator[TestClient, None, None]:
    """API Client for testing routes"""

    def get_ledger_override():
        return ledger

    app.dependency_overrides[get_ledger] = get_ledger_override

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture()
def ledger_state():
    """Comparable snapshot of every node, counter and log entry"""

    def _state(microgrid: MicrogridLedger) -> dict:
        return {
            "nodes": [node.model_dump() for node in microgrid.list_nodes()],
            "stats": microgrid.get_stats().model_dump(),
            "transactions": [tx.model_dump() for tx in microgrid.log],
        }

    return _state

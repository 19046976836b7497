"""
API Interface for the Microgrid Ledger

RESTful API over the ledger operations. The caller principal is taken from
the X-Caller-Identity header; it is not authenticated here.
"""

import enum
import logging

from fastapi import Depends, FastAPI, Header
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from starlette.exceptions import HTTPException

from .error_handling import (
    general_exception_handler,
    http_exception_handler,
    ledger_exception_handler,
    validation_exception_handler,
)
from .exceptions import LedgerError
from .logging_config import logger, set_logger_and_children_level
from .service import MicrogridLedger
from .settings import settings

app = FastAPI(
    title="Microgrid Ledger API",
    description="Node registration, production minting and peer-to-peer energy trading",
    version="1.0.0"
)

app.add_exception_handler(LedgerError, ledger_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Initialize components
ledger = MicrogridLedger()


def get_ledger() -> MicrogridLedger:
    return ledger


def get_caller(x_caller_identity: str = Header(..., min_length=1)) -> str:
    return x_caller_identity


# Request models
class RegisterNodeRequest(BaseModel):
    name: str


class ProductionRequest(BaseModel):
    energy_amount: int


class TradeRequest(BaseModel):
    buyer: str
    energy_amount: int


class ActivationRequest(BaseModel):
    active: bool


class logging_levels(str, enum.Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingLevelRequest(BaseModel):
    level: logging_levels


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Microgrid Ledger API",
        "version": "1.0.0",
        "endpoints": {
            "register": "POST /nodes",
            "record_production": "POST /nodes/production",
            "trade": "POST /trades",
            "set_active": "PATCH /admin/nodes/{identity}/active",
            "get_node": "GET /nodes/{identity}",
            "get_transaction": "GET /transactions/{transaction_id}",
            "statistics": "GET /stats"
        }
    }


@app.post("/nodes", status_code=201, response_model=dict)
def register_node(
    request: RegisterNodeRequest,
    caller: str = Depends(get_caller),
    microgrid: MicrogridLedger = Depends(get_ledger),
):
    """Register the caller as a node"""
    node = microgrid.register_node(caller, request.name)
    return {
        "success": True,
        "node": node.model_dump(mode="json"),
        "message": "Node registered successfully"
    }


@app.post("/nodes/production", response_model=dict)
def record_production(
    request: ProductionRequest,
    caller: str = Depends(get_caller),
    microgrid: MicrogridLedger = Depends(get_ledger),
):
    """Record energy produced by the caller and mint credits for it"""
    credits_earned = microgrid.record_production(caller, request.energy_amount)
    return {
        "success": True,
        "credits_earned": credits_earned,
        "node": microgrid.get_node(caller).model_dump(mode="json")
    }


@app.post("/trades", status_code=201, response_model=dict)
def trade_energy(
    request: TradeRequest,
    caller: str = Depends(get_caller),
    microgrid: MicrogridLedger = Depends(get_ledger),
):
    """Sell energy from the caller to the buyer"""
    transaction_id = microgrid.trade(caller, request.buyer, request.energy_amount)
    transaction = microgrid.get_transaction(transaction_id)
    return {
        "success": True,
        "transaction_id": transaction_id,
        "transaction": transaction.model_dump(mode="json"),
        "message": "Trade completed successfully"
    }


@app.patch("/admin/nodes/{identity}/active", response_model=dict)
def set_node_active(
    identity: str,
    request: ActivationRequest,
    caller: str = Depends(get_caller),
    microgrid: MicrogridLedger = Depends(get_ledger),
):
    """Activate or deactivate a node. Owner only."""
    node = microgrid.set_active(caller, identity, request.active)
    return {
        "success": True,
        "node": node.model_dump(mode="json")
    }


@app.get("/nodes", response_model=dict)
def list_nodes(microgrid: MicrogridLedger = Depends(get_ledger)):
    """Get all nodes in registration order"""
    nodes = microgrid.list_nodes()
    return {
        "success": True,
        "count": len(nodes),
        "nodes": [node.model_dump(mode="json") for node in nodes]
    }


@app.get("/nodes/{identity}", response_model=dict)
def get_node(identity: str, microgrid: MicrogridLedger = Depends(get_ledger)):
    """Get a specific node"""
    return {
        "success": True,
        "node": microgrid.get_node(identity).model_dump(mode="json")
    }


@app.get("/nodes/{identity}/trades", response_model=dict)
def get_node_trades(identity: str, microgrid: MicrogridLedger = Depends(get_ledger)):
    """Get trades in which a node was seller or buyer"""
    trades = microgrid.get_trades_by_node(identity)
    return {
        "success": True,
        "count": len(trades),
        "trades": [tx.model_dump(mode="json") for tx in trades]
    }


@app.get("/transactions/{transaction_id}", response_model=dict)
def get_transaction(transaction_id: int, microgrid: MicrogridLedger = Depends(get_ledger)):
    """Get a specific transaction"""
    return {
        "success": True,
        "transaction": microgrid.get_transaction(transaction_id).model_dump(mode="json")
    }


@app.get("/stats", response_model=dict)
def get_stats(microgrid: MicrogridLedger = Depends(get_ledger)):
    """Get node count, total credits and transaction count"""
    return {
        "success": True,
        "stats": microgrid.get_stats().model_dump()
    }


@app.get("/stats/active-nodes", response_model=dict)
def get_active_node_count(microgrid: MicrogridLedger = Depends(get_ledger)):
    return {
        "success": True,
        "active_node_count": microgrid.get_active_node_count()
    }


@app.get("/stats/trading", response_model=dict)
def get_trading_statistics(microgrid: MicrogridLedger = Depends(get_ledger)):
    return {
        "success": True,
        "trading": microgrid.get_trading_statistics()
    }


@app.get("/stats/summary", response_model=dict)
def get_statistics_summary(microgrid: MicrogridLedger = Depends(get_ledger)):
    """Registry, ledger and trading statistics taken under one lock"""
    statistics = microgrid.get_statistics()
    return {
        "success": True,
        "ledger": statistics["ledger"],
        "trading": statistics["trading"]
    }


@app.post("/change_log_level")
async def change_log_level_endpoint(request: LoggingLevelRequest):
    """Change the logging level at runtime for the application loggers."""
    numeric_level = getattr(logging, request.level.value)
    set_logger_and_children_level(logger, numeric_level)
    return {
        "message": f"Log level changed to {request.level.value}",
        "effective_level": logging.getLevelName(logger.getEffectiveLevel())
    }


def main():
    import uvicorn
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    main()

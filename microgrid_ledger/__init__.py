"""
Microgrid Ledger

A single-ledger accounting engine for a decentralized microgrid: node
registration, production-to-credit minting and atomic peer-to-peer trades.
"""

from .events import EventQueue
from .exceptions import (
    AlreadyRegistered,
    ArithmeticOverflow,
    BuyerInactive,
    BuyerUnknown,
    EmptyName,
    ErrorKind,
    InsufficientBalance,
    InvalidAmount,
    LedgerError,
    NodeInactive,
    NodeNotFound,
    SelfTrade,
    SellerInactive,
    SellerUnknown,
    TransactionOutOfRange,
    Unauthorized,
    ZeroAmount,
)
from .ledger import CreditLedger
from .models import (
    CreditTransfer,
    EnergyProduced,
    EnergyTraded,
    EventType,
    LedgerStats,
    NodeRegistered,
    NodeView,
    Transaction,
)
from .registry import NodeRegistry
from .service import MicrogridLedger
from .trading import TradeEngine
from .transactions import TransactionLog
from .validator import LedgerValidator

__version__ = "1.0.0"
__all__ = [
    "MicrogridLedger",
    "NodeRegistry",
    "CreditLedger",
    "TradeEngine",
    "TransactionLog",
    "LedgerValidator",
    "EventQueue",
    "NodeView",
    "Transaction",
    "LedgerStats",
    "EventType",
    "NodeRegistered",
    "EnergyProduced",
    "EnergyTraded",
    "CreditTransfer",
    "ErrorKind",
    "LedgerError",
    "AlreadyRegistered",
    "EmptyName",
    "NodeNotFound",
    "BuyerUnknown",
    "SellerUnknown",
    "NodeInactive",
    "BuyerInactive",
    "SellerInactive",
    "ZeroAmount",
    "InvalidAmount",
    "SelfTrade",
    "InsufficientBalance",
    "Unauthorized",
    "TransactionOutOfRange",
    "ArithmeticOverflow",
]

from enum import Enum


class ErrorKind(str, Enum):
    ALREADY_REGISTERED = "AlreadyRegistered"
    EMPTY_NAME = "EmptyName"
    NOT_FOUND = "NotFound"
    INACTIVE = "Inactive"
    ZERO_AMOUNT = "ZeroAmount"
    INVALID_AMOUNT = "InvalidAmount"
    SELF_TRADE = "SelfTrade"
    INSUFFICIENT_BALANCE = "InsufficientBalance"
    UNAUTHORIZED = "Unauthorized"
    OUT_OF_RANGE = "OutOfRange"
    OVERFLOW = "Overflow"


class LedgerError(Exception):
    """Base class for every rejected ledger operation."""

    kind: ErrorKind

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AlreadyRegistered(LedgerError):
    """Raised when an identity is registered a second time."""

    kind = ErrorKind.ALREADY_REGISTERED

    def __init__(self, identity):
        self.identity = identity
        super().__init__(f"Node {identity} is already registered")


class EmptyName(LedgerError):
    """Raised when a node is registered without a display name."""

    kind = ErrorKind.EMPTY_NAME

    def __init__(self, identity):
        self.identity = identity
        super().__init__(f"Node {identity}: name must not be empty")


class NodeNotFound(LedgerError):
    """Raised when an identity has never been registered."""

    kind = ErrorKind.NOT_FOUND
    role = "node"

    def __init__(self, identity):
        self.identity = identity
        super().__init__(f"{self.role.capitalize()} {identity} is not registered")


class BuyerUnknown(NodeNotFound):
    role = "buyer"


class SellerUnknown(NodeNotFound):
    role = "seller"


class NodeInactive(LedgerError):
    """Raised when a deactivated node tries to mint or trade."""

    kind = ErrorKind.INACTIVE
    role = "node"

    def __init__(self, identity):
        self.identity = identity
        super().__init__(f"{self.role.capitalize()} {identity} is not active")


class BuyerInactive(NodeInactive):
    role = "buyer"


class SellerInactive(NodeInactive):
    role = "seller"


class ZeroAmount(LedgerError):
    """Raised when an energy amount is not strictly positive."""

    kind = ErrorKind.ZERO_AMOUNT

    def __init__(self, amount):
        self.amount = amount
        super().__init__(f"Energy amount must be positive, got {amount}")


class InvalidAmount(LedgerError):
    """Raised when an energy amount is not an integer."""

    kind = ErrorKind.INVALID_AMOUNT

    def __init__(self, amount):
        self.amount = amount
        super().__init__(
            f"Energy amount must be a whole number of units, got {amount!r}"
        )


class SelfTrade(LedgerError):
    """Raised when seller and buyer are the same identity."""

    kind = ErrorKind.SELF_TRADE

    def __init__(self, identity):
        self.identity = identity
        super().__init__(f"Node {identity} cannot trade with itself")


class InsufficientBalance(LedgerError):
    """Raised when a node does not hold enough credits to cover a transfer."""

    kind = ErrorKind.INSUFFICIENT_BALANCE

    def __init__(self, identity, requested, available):
        self.identity = identity
        self.requested = requested
        self.available = available
        super().__init__(
            f"Node {identity}: requested {requested} credits, available {available}"
        )


class Unauthorized(LedgerError):
    """Raised when a non-owner calls an administrative operation."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, caller):
        self.caller = caller
        super().__init__(f"Caller {caller} is not the ledger owner")


class TransactionOutOfRange(LedgerError):
    """Raised when a transaction id has not been assigned yet."""

    kind = ErrorKind.OUT_OF_RANGE

    def __init__(self, transaction_id, length):
        self.transaction_id = transaction_id
        self.length = length
        super().__init__(
            f"Transaction {transaction_id} out of range, log length is {length}"
        )


class ArithmeticOverflow(LedgerError):
    """Raised when an accumulator would exceed the configured integer width."""

    kind = ErrorKind.OVERFLOW

    def __init__(self, operation, limit):
        self.operation = operation
        self.limit = limit
        super().__init__(f"Arithmetic overflow in {operation}, limit is {limit}")

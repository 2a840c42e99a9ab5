"""Account balances and the transaction ledger."""

from .exceptions import (
    BalanceError,
    InsufficientBalanceError,
    TransactionPermissionError,
    TransactionValidationError,
)
from .models import (
    DATE_RANGES,
    DEFAULT_DATE_RANGE,
    TRANSACTION_ADJUSTMENT,
    TRANSACTION_CREDIT,
    TRANSACTION_DEBIT,
    TRANSACTION_REFUND,
    TRANSACTION_TYPES,
    BalanceSnapshot,
    TransactionFilter,
    TransactionRecord,
)
from .service import BalanceService, order_account_for

__all__ = [
    "BalanceError",
    "BalanceService",
    "BalanceSnapshot",
    "DATE_RANGES",
    "DEFAULT_DATE_RANGE",
    "InsufficientBalanceError",
    "TRANSACTION_ADJUSTMENT",
    "TRANSACTION_CREDIT",
    "TRANSACTION_DEBIT",
    "TRANSACTION_REFUND",
    "TRANSACTION_TYPES",
    "TransactionFilter",
    "TransactionPermissionError",
    "TransactionRecord",
    "TransactionValidationError",
    "order_account_for",
]

"""Earn-n-Learn escrow client: wallet escrow view-model for the student marketplace API."""

from earnlearn.client import WalletClient
from earnlearn.config import ClientConfig
from earnlearn.exceptions import (
    ApiError,
    EarnLearnError,
    MissingTokenError,
    ResponseFormatError,
    ValidationError,
)
from earnlearn.ledger import EscrowLedgerView, available_actions, can_dispute, can_release, partition
from earnlearn.session import FileTokenStore, MemoryTokenStore, Session
from earnlearn.types import (
    CreateEscrowParams,
    Currency,
    EscrowAction,
    EscrowStatus,
    EscrowTransaction,
    Notification,
    ReconcilePolicy,
    TransactionPartition,
    WalletDetails,
)

__version__ = "0.1.0"
__all__ = [
    "ApiError",
    "ClientConfig",
    "CreateEscrowParams",
    "Currency",
    "EarnLearnError",
    "EscrowAction",
    "EscrowLedgerView",
    "EscrowStatus",
    "EscrowTransaction",
    "FileTokenStore",
    "MemoryTokenStore",
    "MissingTokenError",
    "Notification",
    "ReconcilePolicy",
    "ResponseFormatError",
    "Session",
    "TransactionPartition",
    "ValidationError",
    "WalletClient",
    "WalletDetails",
    "available_actions",
    "can_dispute",
    "can_release",
    "partition",
]

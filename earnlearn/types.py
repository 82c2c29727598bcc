"""Type definitions for the Earn-n-Learn escrow client."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class EscrowStatus(str, Enum):
    FUNDED = "funded"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    RELEASED = "released"
    DISPUTED = "disputed"
    REFUNDED = "refunded"


# Statuses from which the paying client may still release or dispute.
ACTIONABLE_STATUSES = frozenset(
    {EscrowStatus.FUNDED, EscrowStatus.IN_PROGRESS, EscrowStatus.COMPLETED}
)

TERMINAL_STATUSES = frozenset(
    {EscrowStatus.RELEASED, EscrowStatus.DISPUTED, EscrowStatus.REFUNDED}
)


class Currency(str, Enum):
    USD = "USD"
    BDT = "BDT"

    @property
    def symbol(self) -> str:
        return {Currency.USD: "$", Currency.BDT: "৳"}[self]


class EscrowAction(str, Enum):
    RELEASE = "release"
    DISPUTE = "dispute"


class ReconcilePolicy(str, Enum):
    """How local state catches up with the server after a mutation."""

    RELOAD = "reload"
    PATCH = "patch"


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass
class EscrowTransaction:
    id: str
    title: str
    amount: Decimal
    status: EscrowStatus
    is_provider: bool
    description: str = ""
    job_type: str = ""
    client_name: str = ""
    client_email: str = ""
    provider_name: str = ""
    provider_email: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    currency: Currency = Currency.USD

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @classmethod
    def from_api(cls, data: dict) -> EscrowTransaction:
        """Build a transaction from the backend's camelCase payload."""
        amount = _to_decimal(data["amount"])
        if not amount > 0:
            raise ValueError(f"Escrow {data['id']} has non-positive amount {amount}")
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "Untitled",
            amount=amount,
            status=EscrowStatus(data["status"]),
            is_provider=bool(data.get("isProvider", False)),
            description=data.get("description") or "",
            job_type=data.get("jobType") or "",
            client_name=data.get("clientName") or "",
            client_email=data.get("clientEmail") or "",
            provider_name=data.get("providerName") or "",
            provider_email=data.get("providerEmail") or "",
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
            currency=Currency(data.get("currency") or Currency.USD.value),
        )


@dataclass
class TransactionPartition:
    """Transactions split by the viewer's role."""

    client_transactions: list[EscrowTransaction] = field(default_factory=list)
    provider_transactions: list[EscrowTransaction] = field(default_factory=list)


@dataclass
class CreateEscrowParams:
    provider_id: str
    amount: Decimal
    job_id: Optional[str] = None
    skill_id: Optional[str] = None
    material_id: Optional[str] = None
    description: Optional[str] = None

    def to_api(self) -> dict:
        payload: dict[str, Any] = {
            "providerId": self.provider_id,
            "amount": float(self.amount),
        }
        if self.job_id:
            payload["jobId"] = self.job_id
        if self.skill_id:
            payload["skillId"] = self.skill_id
        if self.material_id:
            payload["materialId"] = self.material_id
        if self.description:
            payload["description"] = self.description
        return payload


@dataclass
class WalletDetails:
    balance: Decimal
    pending_escrow: Decimal
    monthly_earnings: Decimal = Decimal("0")
    monthly_spending: Decimal = Decimal("0")
    savings_progress: float = 0.0

    @classmethod
    def from_api(cls, data: dict) -> WalletDetails:
        return cls(
            balance=_to_decimal(data.get("balance", 0)),
            pending_escrow=_to_decimal(data.get("pendingEscrow", 0)),
            monthly_earnings=_to_decimal(data.get("monthlyEarnings", 0)),
            monthly_spending=_to_decimal(data.get("monthlySpending", 0)),
            savings_progress=float(data.get("savingsProgress", 0)),
        )


@dataclass
class Notification:
    """A user-facing message emitted by the ledger view."""

    title: str
    description: str
    variant: str = "default"  # "default" or "destructive"

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"

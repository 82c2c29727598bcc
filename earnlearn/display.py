"""Presentation helpers for escrow cards: labels, badge tones, amounts, progress."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from earnlearn.types import Currency, EscrowStatus, EscrowTransaction

STATUS_TONES = {
    EscrowStatus.FUNDED: "blue",
    EscrowStatus.IN_PROGRESS: "amber",
    EscrowStatus.COMPLETED: "emerald",
    EscrowStatus.RELEASED: "green",
    EscrowStatus.DISPUTED: "red",
    EscrowStatus.REFUNDED: "purple",
}

PROGRESS_PERCENT = {
    EscrowStatus.FUNDED: 50,
    EscrowStatus.IN_PROGRESS: 75,
    EscrowStatus.COMPLETED: 90,
    EscrowStatus.RELEASED: 100,
    EscrowStatus.DISPUTED: 75,
    EscrowStatus.REFUNDED: 100,
}

# Happy-path order shown on the progress tracker.
STEP_ORDER = [
    EscrowStatus.FUNDED,
    EscrowStatus.IN_PROGRESS,
    EscrowStatus.COMPLETED,
    EscrowStatus.RELEASED,
]

STEP_TEXT = {
    EscrowStatus.FUNDED: ("Funds Deposited", "Escrow funds secured"),
    EscrowStatus.IN_PROGRESS: ("Work in Progress", "Provider working on task"),
    EscrowStatus.COMPLETED: ("Work Completed", "Awaiting client approval"),
    EscrowStatus.RELEASED: ("Payment Released", "Funds transferred to provider"),
}


@dataclass
class ProgressStep:
    status: EscrowStatus
    label: str
    description: str
    state: str  # "completed" or "pending"
    is_current: bool = False


def status_label(status: EscrowStatus) -> str:
    """``in_progress`` -> ``In Progress``."""
    return status.value.replace("_", " ").title()


def status_tone(status: EscrowStatus) -> str:
    return STATUS_TONES.get(status, "gray")


def format_amount(amount: Decimal, currency: Currency = Currency.USD) -> str:
    quantized = Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{currency.symbol}{quantized:,.2f}"


def transaction_amount(tx: EscrowTransaction) -> str:
    return format_amount(tx.amount, tx.currency)


def progress_percent(status: EscrowStatus) -> int:
    return PROGRESS_PERCENT.get(status, 0)


def progress_steps(status: EscrowStatus) -> list[ProgressStep]:
    """
    Step states for the progress tracker.

    A disputed escrow shows everything up to and including work in progress
    as done. A refunded escrow left the happy path, so only funding counts.
    """
    if status is EscrowStatus.DISPUTED:
        reached = STEP_ORDER.index(EscrowStatus.IN_PROGRESS)
    elif status is EscrowStatus.REFUNDED:
        reached = STEP_ORDER.index(EscrowStatus.FUNDED)
    else:
        reached = STEP_ORDER.index(status)

    steps = []
    for i, step in enumerate(STEP_ORDER):
        label, description = STEP_TEXT[step]
        steps.append(
            ProgressStep(
                status=step,
                label=label,
                description=description,
                state="completed" if i <= reached else "pending",
                is_current=step is status,
            )
        )
    return steps


def progress_badge(status: EscrowStatus) -> str:
    if status is EscrowStatus.DISPUTED:
        return "Disputed"
    return f"{progress_percent(status)}% Complete"

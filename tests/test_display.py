"""Card presentation helpers."""

from __future__ import annotations

from decimal import Decimal

import pytest

from earnlearn.display import (
    format_amount,
    progress_badge,
    progress_percent,
    progress_steps,
    status_label,
    status_tone,
    transaction_amount,
)
from earnlearn.types import Currency, EscrowStatus, EscrowTransaction


@pytest.mark.parametrize(
    "status, label",
    [
        (EscrowStatus.FUNDED, "Funded"),
        (EscrowStatus.IN_PROGRESS, "In Progress"),
        (EscrowStatus.REFUNDED, "Refunded"),
    ],
)
def test_status_label(status, label):
    assert status_label(status) == label


def test_status_tone():
    assert status_tone(EscrowStatus.DISPUTED) == "red"
    assert status_tone(EscrowStatus.RELEASED) == "green"


def test_format_amount_per_currency():
    assert format_amount(Decimal("500")) == "$500.00"
    assert format_amount(Decimal("1234.5"), Currency.BDT) == "৳1,234.50"
    assert format_amount(Decimal("0.005")) == "$0.01"


def test_transaction_amount_uses_its_currency():
    tx = EscrowTransaction(
        id="1",
        title="Tutoring",
        amount=Decimal("350"),
        status=EscrowStatus.FUNDED,
        is_provider=False,
        currency=Currency.BDT,
    )
    assert transaction_amount(tx) == "৳350.00"


def test_progress_steps_follow_status():
    steps = progress_steps(EscrowStatus.IN_PROGRESS)
    assert [s.state for s in steps] == ["completed", "completed", "pending", "pending"]
    assert [s.is_current for s in steps] == [False, True, False, False]
    assert progress_percent(EscrowStatus.IN_PROGRESS) == 75


def test_disputed_progress():
    steps = progress_steps(EscrowStatus.DISPUTED)
    assert [s.state for s in steps] == ["completed", "completed", "pending", "pending"]
    assert not any(s.is_current for s in steps)
    assert progress_badge(EscrowStatus.DISPUTED) == "Disputed"


def test_released_progress():
    assert all(s.state == "completed" for s in progress_steps(EscrowStatus.RELEASED))
    assert progress_badge(EscrowStatus.RELEASED) == "100% Complete"

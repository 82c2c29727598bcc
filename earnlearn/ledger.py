"""Escrow ledger view-model.

Holds the viewer's escrow transactions, decides which actions each card may
offer, and mediates the two payer actions (release and dispute). The backend
owns every status transition; this module only requests them and then
reconciles its local copy with the server's answer.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Callable, Optional

import httpx

from earnlearn.client import WalletClient, validate_create_params, validate_dispute_reason
from earnlearn.exceptions import EarnLearnError, ValidationError
from earnlearn.types import (
    ACTIONABLE_STATUSES,
    CreateEscrowParams,
    Currency,
    EscrowAction,
    EscrowStatus,
    EscrowTransaction,
    Notification,
    ReconcilePolicy,
    TransactionPartition,
)

logger = logging.getLogger(__name__)

# Failures a mutation or load may hit on the way to the backend.
REQUEST_ERRORS = (EarnLearnError, httpx.HTTPError)


def can_release(tx: EscrowTransaction) -> bool:
    return tx.status in ACTIONABLE_STATUSES


def can_dispute(tx: EscrowTransaction) -> bool:
    return tx.status in ACTIONABLE_STATUSES


def partition(transactions: list[EscrowTransaction]) -> TransactionPartition:
    """Split transactions into payer-side and payee-side lists, keeping order."""
    result = TransactionPartition()
    for tx in transactions:
        if tx.is_provider:
            result.provider_transactions.append(tx)
        else:
            result.client_transactions.append(tx)
    return result


def available_actions(tx: EscrowTransaction) -> list[EscrowAction]:
    """Controls to render on a transaction card. Providers never get any."""
    if tx.is_provider:
        return []
    actions = []
    if can_dispute(tx):
        actions.append(EscrowAction.DISPUTE)
    if can_release(tx):
        actions.append(EscrowAction.RELEASE)
    return actions


class EscrowLedgerView:
    """
    View-model for the escrow tab of the wallet.

    Usage:
        async with WalletClient(session) as client:
            view = EscrowLedgerView(client)
            await view.load()
            for tx in view.client_transactions:
                if EscrowAction.RELEASE in view.available_actions(tx):
                    await view.release(tx.id)

    Notifications are appended to ``notifications`` and, when given, passed to
    ``on_notify`` as they happen.
    """

    def __init__(
        self,
        client: WalletClient,
        reconcile: Optional[ReconcilePolicy] = None,
        on_notify: Optional[Callable[[Notification], None]] = None,
    ):
        self.client = client
        self.reconcile = ReconcilePolicy(reconcile or client.config.reconcile)
        self.on_notify = on_notify
        self.transactions: list[EscrowTransaction] = []
        self.notifications: list[Notification] = []
        self.load_error: Optional[str] = None
        self._pending: set[str] = set()

    # ──────────────────────────────────────────────────────
    # QUERIES
    # ──────────────────────────────────────────────────────

    async def load(self) -> list[EscrowTransaction]:
        """Fetch the viewer's transactions. Failures leave an empty list."""
        if not self.client.session.is_authenticated:
            logger.error("No auth token found, skipping escrow load")
            self.transactions = []
            self.load_error = "Not signed in"
            return self.transactions

        try:
            transactions = await self.client.get_escrow_transactions()
        except (*REQUEST_ERRORS, KeyError, TypeError, ValueError, ArithmeticError) as e:
            logger.error("Error fetching escrow transactions: %s", e)
            self.transactions = []
            self.load_error = str(e) or e.__class__.__name__
            return self.transactions

        self.transactions = transactions
        self.load_error = None
        logger.info("Loaded %d escrow transactions", len(transactions))
        return self.transactions

    def partition(
        self, transactions: Optional[list[EscrowTransaction]] = None
    ) -> TransactionPartition:
        return partition(self.transactions if transactions is None else transactions)

    @property
    def client_transactions(self) -> list[EscrowTransaction]:
        return self.partition().client_transactions

    @property
    def provider_transactions(self) -> list[EscrowTransaction]:
        return self.partition().provider_transactions

    def find(self, transaction_id: str) -> Optional[EscrowTransaction]:
        for tx in self.transactions:
            if tx.id == transaction_id:
                return tx
        return None

    def is_pending(self, transaction_id: str) -> bool:
        return transaction_id in self._pending

    def available_actions(self, tx: EscrowTransaction) -> list[EscrowAction]:
        if self.is_pending(tx.id):
            return []
        return available_actions(tx)

    can_release = staticmethod(can_release)
    can_dispute = staticmethod(can_dispute)

    def pending_escrow_total(self, currency: Currency = Currency.USD) -> Decimal:
        """Funds still held for the viewer as provider, in one currency."""
        held = (EscrowStatus.FUNDED, EscrowStatus.IN_PROGRESS)
        return sum(
            (
                tx.amount
                for tx in self.provider_transactions
                if tx.status in held and tx.currency == currency
            ),
            Decimal("0"),
        )

    # ──────────────────────────────────────────────────────
    # MUTATIONS
    # ──────────────────────────────────────────────────────

    async def release(self, transaction_id: str) -> bool:
        """Release held funds to the provider. Returns True on success."""
        if not self._may_act(transaction_id, EscrowAction.RELEASE):
            return False

        self._pending.add(transaction_id)
        try:
            response = await self.client.release_escrow(transaction_id)
        except REQUEST_ERRORS as e:
            logger.error("Error releasing escrow %s: %s", transaction_id, e)
            self._notify("Error", "Failed to release payment. Please try again.", error=True)
            return False
        finally:
            self._pending.discard(transaction_id)

        logger.info("Escrow %s released", transaction_id)
        await self._reconcile(response)
        self._notify(
            "Payment Released",
            "The payment has been released to the service provider.",
        )
        return True

    async def dispute(self, transaction_id: str, reason: str) -> bool:
        """File a dispute. Blank reasons are refused before any request."""
        try:
            cleaned = validate_dispute_reason(reason)
        except ValidationError as e:
            self._notify("Error", str(e), error=True)
            return False

        if not self._may_act(transaction_id, EscrowAction.DISPUTE):
            return False

        self._pending.add(transaction_id)
        try:
            response = await self.client.dispute_escrow(transaction_id, cleaned)
        except REQUEST_ERRORS as e:
            logger.error("Error disputing escrow %s: %s", transaction_id, e)
            self._notify("Error", "Failed to file dispute. Please try again.", error=True)
            return False
        finally:
            self._pending.discard(transaction_id)

        logger.info("Dispute filed for escrow %s", transaction_id)
        await self._reconcile(response)
        self._notify(
            "Dispute Filed",
            "Your dispute has been filed and will be reviewed by our team.",
        )
        return True

    async def create_escrow(self, params: CreateEscrowParams) -> Optional[str]:
        """Fund a new escrow, then reload. Returns the new id or None."""
        try:
            validate_create_params(params)
        except ValidationError as e:
            self._notify("Error", str(e), error=True)
            return None

        try:
            escrow_id = await self.client.create_escrow(params)
        except (*REQUEST_ERRORS, KeyError, TypeError) as e:
            logger.error("Error creating escrow: %s", e)
            self._notify("Error", "Failed to create escrow payment", error=True)
            return None

        logger.info("Escrow %s created for provider %s", escrow_id, params.provider_id)
        await self.load()
        self._notify("Escrow Created", "Escrow payment created successfully!")
        return escrow_id

    # ──────────────────────────────────────────────────────
    # INTERNAL
    # ──────────────────────────────────────────────────────

    def _may_act(self, transaction_id: str, action: EscrowAction) -> bool:
        if self.is_pending(transaction_id):
            logger.debug("Escrow %s already has a request in flight", transaction_id)
            return False

        # Ids we have never loaded go to the backend, which enforces the rules.
        tx = self.find(transaction_id)
        if tx is not None and action not in available_actions(tx):
            logger.warning(
                "Refusing %s on escrow %s (status=%s, provider=%s)",
                action.value,
                transaction_id,
                tx.status.value,
                tx.is_provider,
            )
            self._notify("Error", f"This payment cannot be {_past(action)}.", error=True)
            return False
        return True

    async def _reconcile(self, response: Any) -> None:
        if self.reconcile is ReconcilePolicy.PATCH:
            updated = _transaction_from_response(response)
            if updated is not None and self._patch(updated):
                return
        await self.load()

    def _patch(self, updated: EscrowTransaction) -> bool:
        for i, tx in enumerate(self.transactions):
            if tx.id == updated.id:
                self.transactions[i] = updated
                return True
        return False

    def _notify(self, title: str, description: str, error: bool = False) -> None:
        notification = Notification(
            title=title,
            description=description,
            variant="destructive" if error else "default",
        )
        self.notifications.append(notification)
        if self.on_notify is not None:
            self.on_notify(notification)


def _past(action: EscrowAction) -> str:
    return {EscrowAction.RELEASE: "released", EscrowAction.DISPUTE: "disputed"}[action]


def _transaction_from_response(response: Any) -> Optional[EscrowTransaction]:
    if not isinstance(response, dict):
        return None
    body = response.get("transaction", response)
    if not isinstance(body, dict) or "id" not in body or "status" not in body:
        return None
    try:
        return EscrowTransaction.from_api(body)
    except (KeyError, ValueError, ArithmeticError) as e:
        logger.debug("Mutation response is not a transaction: %s", e)
        return None

"""Earn-n-Learn wallet client: thin async wrapper over the escrow REST endpoints.

Usage:
    session = Session(FileTokenStore("~/.earnlearn/storage.json"))
    async with WalletClient(session) as client:
        transactions = await client.get_escrow_transactions()
        await client.release_escrow(transactions[0].id)
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from earnlearn.config import ClientConfig
from earnlearn.exceptions import ApiError, ResponseFormatError, ValidationError
from earnlearn.session import Session
from earnlearn.types import CreateEscrowParams, EscrowTransaction, WalletDetails

logger = logging.getLogger(__name__)


def validate_create_params(params: CreateEscrowParams) -> None:
    """Reject escrow requests the backend would refuse anyway."""
    if not params.provider_id:
        raise ValidationError("Provider is required")
    if params.amount is None or params.amount <= 0:
        raise ValidationError("Please enter a valid amount")
    if not (params.job_id or params.skill_id or params.material_id):
        raise ValidationError("Job, skill, or material ID is required")


def validate_dispute_reason(reason: Optional[str]) -> str:
    """Return the trimmed reason, or raise if nothing is left."""
    cleaned = (reason or "").strip()
    if not cleaned:
        raise ValidationError("Please provide a reason for the dispute.")
    return cleaned


class WalletClient:
    """
    Async client for the wallet/escrow part of the Earn-n-Learn API.

    Every request carries the session's bearer token. Requests are never
    sent without one: ``MissingTokenError`` is raised first.
    """

    def __init__(
        self,
        session: Session,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.session = session
        self.config = config or ClientConfig()
        self._http = httpx.AsyncClient(
            base_url=self.config.api_url + "/",
            timeout=self.config.timeout,
            transport=transport,
        )

    # ──────────────────────────────────────────────────────
    # ESCROW
    # ──────────────────────────────────────────────────────

    async def get_escrow_transactions(self) -> list[EscrowTransaction]:
        """All escrow transactions visible to the current viewer."""
        data = await self._request("GET", "wallet/escrow")
        if data is None:
            return []
        if not isinstance(data, list):
            raise ResponseFormatError("wallet/escrow", "a list of transactions", data)
        for item in data:
            if not isinstance(item, dict):
                raise ResponseFormatError("wallet/escrow", "transaction objects", item)
        return [EscrowTransaction.from_api(item) for item in data]

    async def create_escrow(self, params: CreateEscrowParams) -> str:
        """Fund a new escrow from the viewer's wallet. Returns the new id."""
        validate_create_params(params)
        data = await self._request("POST", "wallet/escrow", json=params.to_api())
        if not isinstance(data, dict) or data.get("id") is None:
            raise ResponseFormatError("wallet/escrow", "an object with an id", data)
        return str(data["id"])

    async def release_escrow(self, transaction_id: str) -> Any:
        """Release held funds to the provider."""
        return await self._request("POST", f"wallet/escrow/{transaction_id}/release")

    async def dispute_escrow(self, transaction_id: str, reason: str) -> Any:
        """Flag a transaction for arbitration."""
        cleaned = validate_dispute_reason(reason)
        return await self._request(
            "POST", f"wallet/escrow/{transaction_id}/dispute", json={"reason": cleaned}
        )

    # ──────────────────────────────────────────────────────
    # WALLET
    # ──────────────────────────────────────────────────────

    async def get_wallet_details(self) -> WalletDetails:
        data = await self._request("GET", "wallet/details")
        if data is not None and not isinstance(data, dict):
            raise ResponseFormatError("wallet/details", "an object", data)
        return WalletDetails.from_api(data or {})

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.close()

    # ──────────────────────────────────────────────────────
    # INTERNAL
    # ──────────────────────────────────────────────────────

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        headers = self.session.auth_headers()
        logger.debug("%s %s", method, path)
        resp = await self._http.request(method, path, json=json, headers=headers)
        if resp.is_error:
            raise ApiError(resp.status_code, _error_message(resp), path=path)
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return None


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.reason_phrase or "Request failed"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return resp.reason_phrase or "Request failed"

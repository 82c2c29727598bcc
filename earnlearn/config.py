"""Client configuration: API location, timeouts and reconciliation policy."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from earnlearn.types import ReconcilePolicy

# ──────────────────────────────────────────────────────
# Defaults
# ──────────────────────────────────────────────────────

DEFAULT_API_URL = "http://localhost:8080/api"
DEFAULT_TIMEOUT = 30.0
DEFAULT_TOKEN_FILE = Path.home() / ".earnlearn" / "storage.json"


@dataclass
class ClientConfig:
    api_url: str = DEFAULT_API_URL
    timeout: Optional[float] = DEFAULT_TIMEOUT
    token_file: Path = DEFAULT_TOKEN_FILE
    reconcile: ReconcilePolicy = ReconcilePolicy.RELOAD

    def __post_init__(self):
        self.api_url = self.api_url.rstrip("/")
        self.token_file = Path(self.token_file)
        self.reconcile = ReconcilePolicy(self.reconcile)

    def endpoint(self, path: str) -> str:
        """Absolute URL for an API path such as ``wallet/escrow``."""
        return f"{self.api_url}/{path.lstrip('/')}"

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Defaults overridden by ``EARNLEARN_*`` environment variables.

        ``EARNLEARN_TIMEOUT=none`` disables the client-side timeout.
        """
        timeout_env = os.getenv("EARNLEARN_TIMEOUT")
        if timeout_env is None:
            timeout: Optional[float] = DEFAULT_TIMEOUT
        elif timeout_env.strip().lower() in ("", "none"):
            timeout = None
        else:
            timeout = float(timeout_env)

        return cls(
            api_url=os.getenv("EARNLEARN_API_URL", DEFAULT_API_URL),
            timeout=timeout,
            token_file=Path(os.getenv("EARNLEARN_TOKEN_FILE", str(DEFAULT_TOKEN_FILE))),
            reconcile=ReconcilePolicy(os.getenv("EARNLEARN_RECONCILE", "reload").lower()),
        )

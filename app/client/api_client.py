# File: app/client/api_client.py

"""
Centralized API client for the RWA Portal backend.

This is the Python counterpart of the dashboard's fetch wrapper:
1. Attaches ``Authorization: Bearer <token>`` to every non-public call
2. Keeps the token client-side (in memory, optionally persisted to a file)
3. Turns any non-2xx response into ApiError carrying the server's message
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

PUBLIC_PATHS = {
    "/api/auth/login",
    "/api/auth/register",
    "/api/health",
    "/api/assets/marketplace",
    "/api/assets/summary",
    "/api/marketplace/listings",
    "/api/liquidity/pools",
}


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, payload: Optional[dict] = None):
        self.status_code = status_code
        self.message = message
        self.payload = payload or {}
        super().__init__(f"HTTP {status_code}: {message}")


def is_public_endpoint(path: str) -> bool:
    return path in PUBLIC_PATHS


class ApiClient:
    """
    Args:
        base_url: backend origin, e.g. "http://localhost:5001"
        session: anything with a requests-style ``request`` method
        token_file: optional path used to persist the bearer token
        timeout: per-request timeout in seconds
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5001",
        session: Any = None,
        token_file: Optional[str] = None,
        timeout: int = 20,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.token_file = Path(token_file) if token_file else None
        self.timeout = timeout
        self.token: Optional[str] = self._load_token()

    # -----------------------------
    # Token storage
    # -----------------------------

    def _load_token(self) -> Optional[str]:
        if self.token_file and self.token_file.is_file():
            token = self.token_file.read_text(encoding="utf-8").strip()
            return token or None
        return None

    def set_token(self, token: Optional[str]) -> None:
        self.token = token
        if self.token_file is None:
            return
        if token:
            self.token_file.write_text(token, encoding="utf-8")
        elif self.token_file.exists():
            self.token_file.unlink()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    # -----------------------------
    # Transport
    # -----------------------------

    def request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> dict:
        headers = {"Accept": "application/json"}
        if not is_public_endpoint(path) and self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        logger.debug("API request: %s %s", method, path)
        resp = self.session.request(
            method,
            f"{self.base_url}{path}",
            json=json,
            params=params,
            headers=headers,
            timeout=self.timeout,
        )

        try:
            data = resp.json()
        except ValueError:
            data = {}

        if resp.status_code >= 400:
            message = data.get("message") if isinstance(data, dict) else None
            raise ApiError(resp.status_code, message or f"HTTP {resp.status_code}", data)
        return data

    # -----------------------------
    # Auth
    # -----------------------------

    def register(self, name: str, email: str, password: str) -> dict:
        return self.request("POST", "/api/auth/register", json={"name": name, "email": email, "password": password})

    def login(self, email: str, password: str) -> dict:
        data = self.request("POST", "/api/auth/login", json={"email": email, "password": password})
        if data.get("token"):
            self.set_token(data["token"])
        return data

    def logout(self) -> None:
        self.set_token(None)

    def me(self) -> dict:
        return self.request("GET", "/api/auth/me")["user"]

    # -----------------------------
    # KYC
    # -----------------------------

    def submit_kyc(self, documents: List[str]) -> dict:
        return self.request("POST", "/api/kyc/submit", json={"documents": documents})

    def kyc_status(self) -> dict:
        return self.request("GET", "/api/kyc/status")

    # -----------------------------
    # Assets
    # -----------------------------

    def pledge_asset(
        self,
        asset_type: str,
        description: str,
        estimated_value: float,
        documents: Optional[List[str]] = None,
    ) -> dict:
        body = {
            "assetType": asset_type,
            "description": description,
            "estimatedValue": estimated_value,
            "documents": documents or [],
        }
        return self.request("POST", "/api/assets/pledge", json=body)["asset"]

    def my_assets(self, status: Optional[str] = None) -> List[dict]:
        params = {"status": status} if status else None
        return self.request("GET", "/api/assets/mine", params=params)["assets"]

    def mint_token(self, asset_id: str, **options: Any) -> dict:
        return self.request("POST", f"/api/assets/{asset_id}/mint", json=options)["asset"]

    def set_listing(self, asset_id: str, is_listed: bool) -> dict:
        return self.request("PATCH", f"/api/assets/{asset_id}/listing", json={"isListed": is_listed})["asset"]

    # -----------------------------
    # Marketplace / liquidity / activity
    # -----------------------------

    def marketplace_listings(self) -> List[dict]:
        return self.request("GET", "/api/marketplace/listings")["listings"]

    def buy_token(self, token_id: str, amount: float) -> dict:
        return self.request("POST", "/api/marketplace/buy", json={"tokenId": token_id, "amount": amount})

    def sell_token(self, token_id: str, amount: float, price: float) -> dict:
        body = {"tokenId": token_id, "amount": amount, "price": price}
        return self.request("POST", "/api/marketplace/sell", json=body)

    def liquidity_pools(self) -> List[dict]:
        return self.request("GET", "/api/liquidity/pools")["pools"]

    def provide_liquidity(self, pool_id: str, amount: float) -> dict:
        return self.request("POST", "/api/liquidity/provide", json={"poolId": pool_id, "amount": amount})

    def withdraw_liquidity(self, pool_id: str, amount: float) -> dict:
        return self.request("POST", "/api/liquidity/withdraw", json={"poolId": pool_id, "amount": amount})

    def my_activity(self, limit: Optional[int] = None) -> List[dict]:
        params = {"limit": limit} if limit else None
        return self.request("GET", "/api/activity/mine", params=params)["activities"]

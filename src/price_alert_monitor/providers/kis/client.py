"""Authenticated HTTP client shared by the KIS domestic and overseas providers."""
import asyncio
import logging
import time

import httpx

from price_alert_monitor.providers.kis.models import (KisEnvelope,
                                                      KisTokenRequest,
                                                      KisTokenResponse)

logger = logging.getLogger(__name__)

# Refresh the token this many seconds before KIS says it expires.
TOKEN_EXPIRY_MARGIN_SECONDS = 60.0


class KisClient:
    """Thin wrapper over httpx for KIS REST calls.

    Issues an access token with the app key/secret on first use and reuses it
    until shortly before expiry. KIS rate-limits token issuance, so concurrent
    callers wait on one refresh instead of each requesting a token.
    """

    DEFAULT_BASE_URL = "https://openapi.koreainvestment.com:9443"

    def __init__(
        self,
        app_key: str,
        app_secret: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._app_key = app_key
        self._app_secret = app_secret
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json; charset=utf-8"},
            transport=transport,
        )
        self._token: str | None = None
        self._token_expires_at = 0.0
        self._token_lock = asyncio.Lock()

    @property
    def configured(self) -> bool:
        return bool(self._app_key and self._app_secret)

    async def _access_token(self) -> str:
        if self._token and time.monotonic() < self._token_expires_at:
            return self._token
        async with self._token_lock:
            if self._token and time.monotonic() < self._token_expires_at:
                return self._token
            if not self.configured:
                raise ValueError("KIS app key/secret are not configured")
            body = KisTokenRequest(appkey=self._app_key, appsecret=self._app_secret)
            response = await self._client.post("/oauth2/tokenP", json=body.model_dump())
            response.raise_for_status()
            token = KisTokenResponse.model_validate(response.json())
            self._token = token.access_token
            self._token_expires_at = (
                time.monotonic() + token.expires_in - TOKEN_EXPIRY_MARGIN_SECONDS
            )
            logger.info("Issued KIS access token (expires in %ss)", token.expires_in)
            return self._token

    async def get(self, path: str, tr_id: str, params: dict) -> dict:
        """GET a KIS quotation endpoint and return its `output` object.

        Raises:
            httpx.HTTPStatusError: non-2xx response.
            ValueError: KIS reported a business error (rt_cd != "0").
        """
        token = await self._access_token()
        headers = {
            "authorization": f"Bearer {token}",
            "appkey": self._app_key,
            "appsecret": self._app_secret,
            "tr_id": tr_id,
            "custtype": "P",
        }
        response = await self._client.get(path, params=params, headers=headers)
        response.raise_for_status()
        envelope = KisEnvelope.model_validate(response.json())
        if not envelope.ok:
            raise ValueError(f"KIS error {envelope.msg_cd}: {envelope.msg1}")
        return envelope.output

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

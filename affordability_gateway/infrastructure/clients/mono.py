"""Mono API HTTP client for account linking and statement retrieval"""

import logging
import httpx
from typing import List, Optional
from affordability_gateway.domain.models import Transaction
from affordability_gateway.domain.parsing import parse_transactions
from affordability_gateway.domain.exceptions import (
    AccountNotFoundError,
    InvalidCredentialsError,
    ProviderConfigurationError,
    ProviderUnavailableError,
)
from affordability_gateway.config import settings
from affordability_gateway.infrastructure.observability.metrics import mono_failure_counter

logger = logging.getLogger(__name__)


class MonoClient:
    """Client for the Mono bank data API"""

    def __init__(
        self,
        base_url: str | None = None,
        secret_key: str | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.mono_api_base).rstrip("/")
        self.secret_key = secret_key if secret_key is not None else settings.mono_secret_key
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    def _headers(self) -> dict:
        if not self.secret_key:
            mono_failure_counter.labels(reason="not_configured").inc()
            raise ProviderConfigurationError("MONO_SECRET_KEY is not configured")
        return {"mono-sec-key": self.secret_key}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def exchange_token(self, code: str) -> str:
        """
        Exchange a one-time Mono Connect code for an account ID.

        Raises:
            InvalidCredentialsError: Mono rejected the code or the secret key (400/401)
            ProviderUnavailableError: On timeout, other HTTP errors, or invalid response
        """
        headers = self._headers()
        async with self._client() as client:
            try:
                response = await client.post(
                    f"{self.base_url}/account/auth",
                    json={"code": code},
                    headers=headers,
                )
                response.raise_for_status()
                account_id = response.json()["id"]
                if account_id is None or not str(account_id).strip():
                    raise ValueError("missing account id")

            except httpx.HTTPStatusError as e:
                if e.response.status_code in (400, 401):
                    mono_failure_counter.labels(reason="invalid_credentials").inc()
                    raise InvalidCredentialsError("Invalid Mono code or credentials") from e
                mono_failure_counter.labels(reason="unavailable").inc()
                raise ProviderUnavailableError(f"Mono API error: {e.response.status_code}") from e
            except httpx.TimeoutException as e:
                mono_failure_counter.labels(reason="unavailable").inc()
                raise ProviderUnavailableError(f"Mono API timeout after {self.timeout}s") from e
            except httpx.RequestError as e:
                mono_failure_counter.labels(reason="unavailable").inc()
                raise ProviderUnavailableError("Failed to connect to Mono API") from e
            except (KeyError, ValueError, TypeError) as e:
                mono_failure_counter.labels(reason="unavailable").inc()
                raise ProviderUnavailableError(f"Invalid token exchange response: {e}") from e

        logger.info("MonoTokenExchanged", extra={"account_id": account_id})
        return str(account_id)

    async def get_statement(self, account_id: str) -> List[Transaction]:
        """
        Fetch the account statement (transaction history).

        Entries are parsed leniently; malformed fields never fail the call.

        Raises:
            AccountNotFoundError: Mono does not know the account (404)
            ProviderUnavailableError: On timeout, other HTTP errors, or invalid response
        """
        headers = self._headers()
        async with self._client() as client:
            try:
                response = await client.get(
                    f"{self.base_url}/accounts/{account_id}/statement",
                    headers=headers,
                )
                response.raise_for_status()
                data = response.json()["data"]

            except httpx.HTTPStatusError as e:
                if e.response.status_code == 404:
                    mono_failure_counter.labels(reason="not_found").inc()
                    raise AccountNotFoundError("Mono account not found") from e
                mono_failure_counter.labels(reason="unavailable").inc()
                raise ProviderUnavailableError(f"Mono API error: {e.response.status_code}") from e
            except httpx.TimeoutException as e:
                mono_failure_counter.labels(reason="unavailable").inc()
                raise ProviderUnavailableError(f"Mono API timeout after {self.timeout}s") from e
            except httpx.RequestError as e:
                mono_failure_counter.labels(reason="unavailable").inc()
                raise ProviderUnavailableError("Failed to retrieve statement from Mono API") from e
            except (KeyError, ValueError, TypeError) as e:
                mono_failure_counter.labels(reason="unavailable").inc()
                raise ProviderUnavailableError(f"Invalid statement response: {e}") from e

        transactions = parse_transactions(data)
        logger.info(
            "MonoStatementRetrieved",
            extra={"account_id": account_id, "transaction_count": len(transactions)},
        )
        return transactions

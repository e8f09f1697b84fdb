"""Client for the ledger API that reports outstanding balances per wallet."""
import time
from typing import Optional

import httpx

from wallet_credit.config import settings
from wallet_credit.logging import get_logger
from wallet_credit import metrics

logger = get_logger(__name__)


class LedgerApiError(Exception):
    """Raised when the ledger API returns an error."""
    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Ledger API error {status_code}: {detail}")


class LedgerClient:
    """Client for fetching a wallet's outstanding balance from the ledger."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initialize the ledger client.

        Args:
            base_url: Base URL of the ledger API. Defaults to settings.ledger_api_base.
            timeout: Request timeout in seconds. Defaults to settings.ledger_timeout_seconds.
        """
        self.base_url = base_url or settings.ledger_api_base
        self.timeout = timeout or settings.ledger_timeout_seconds

    async def get_outstanding_balance(self, wallet_address: str) -> float:
        """
        Fetch the balance a wallet currently owes against its credit line.

        A wallet unknown to the ledger owes nothing.

        Args:
            wallet_address: The wallet address

        Returns:
            Outstanding balance in currency units

        Raises:
            LedgerApiError: If the API fails or returns a malformed body
        """
        url = f"{self.base_url}/ledger/balance"
        params = {"wallet_address": wallet_address}

        start_time = time.perf_counter()

        logger.info("ledger_api_request_started", wallet_address=wallet_address, url=url)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(url, params=params)
                duration_seconds = time.perf_counter() - start_time

                if response.status_code == 404:
                    logger.info(
                        "ledger_wallet_not_found",
                        wallet_address=wallet_address,
                        duration_ms=round(duration_seconds * 1000, 2),
                        outcome="not_found",
                    )
                    metrics.record_ledger_fetch(success=True, latency_seconds=duration_seconds)
                    return 0.0

                response.raise_for_status()

                data = response.json()
                try:
                    balance = float(data["outstanding_balance"])
                except (KeyError, TypeError, ValueError) as e:
                    metrics.record_ledger_fetch(
                        success=False, latency_seconds=duration_seconds, error_type="invalid_response"
                    )
                    raise LedgerApiError(502, f"Malformed ledger response: {e}")

                logger.info(
                    "ledger_api_request_completed",
                    wallet_address=wallet_address,
                    outstanding_balance=balance,
                    duration_ms=round(duration_seconds * 1000, 2),
                    outcome="success",
                )
                metrics.record_ledger_fetch(success=True, latency_seconds=duration_seconds)

                return balance

            except httpx.HTTPStatusError as e:
                duration_seconds = time.perf_counter() - start_time

                logger.error(
                    "ledger_api_http_error",
                    wallet_address=wallet_address,
                    status_code=e.response.status_code,
                    duration_ms=round(duration_seconds * 1000, 2),
                    error=str(e),
                    outcome="error",
                )
                metrics.record_ledger_fetch(
                    success=False, latency_seconds=duration_seconds, error_type="http_error"
                )

                raise LedgerApiError(e.response.status_code, str(e))

            except httpx.RequestError as e:
                duration_seconds = time.perf_counter() - start_time

                logger.error(
                    "ledger_api_request_error",
                    wallet_address=wallet_address,
                    duration_ms=round(duration_seconds * 1000, 2),
                    error=str(e),
                    outcome="error",
                )
                error_type = "timeout" if isinstance(e, httpx.TimeoutException) else "connection_error"
                metrics.record_ledger_fetch(
                    success=False, latency_seconds=duration_seconds, error_type=error_type
                )

                raise LedgerApiError(503, f"Request failed: {e}")

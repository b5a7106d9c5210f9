"""Banking service client for account and transaction lookups."""
import time
import logging
from typing import Any, Dict, Optional
import httpx

from config import BANKING_API_URL, BANKING_API_TIMEOUT
from models.banking import Account, Transaction
from models.results import BankingResult, ErrorKind, ServiceError

logger = logging.getLogger(__name__)


class BankingClient:
    """Read-only wrapper over the structured-data (banking) HTTP service."""

    def __init__(
        self,
        base_url: Optional[str] = BANKING_API_URL,
        timeout: float = BANKING_API_TIMEOUT
    ):
        """
        Initialize the banking client.

        Args:
            base_url: Root URL of the banking service (e.g. http://localhost:3002)
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = timeout

        if self.base_url:
            logger.info(f"BankingClient initialized for {self.base_url}")
        else:
            logger.error("BANKING_API_URL is not set; banking lookups will fail")

    def get_account_balance(self, account_id: str) -> BankingResult:
        """Fetch an account record (balance, currency, name, type)."""
        result = self._get(f"/account-balance/{account_id}")
        if result.ok:
            result.data = self._parse(result, Account.from_dict)
        return result

    def get_transaction_history(self, account_id: str) -> BankingResult:
        """Fetch the list of recent transactions for an account."""
        result = self._get(f"/transaction-history/{account_id}")
        if result.ok:
            result.data = self._parse(result, lambda data: [Transaction.from_dict(t) for t in data])
        return result

    def list_accounts(self) -> BankingResult:
        """Fetch every account known to the banking service."""
        result = self._get("/accounts")
        if result.ok:
            result.data = self._parse(result, lambda data: [Account.from_dict(a) for a in data])
        return result

    def _parse(self, result: BankingResult, build):
        """Convert the ``data`` field into models, flagging unexpected shapes."""
        try:
            return build(result.data)
        except (KeyError, TypeError, AttributeError) as e:
            logger.error(f"Unexpected banking payload shape: {e}")
            result.error = ServiceError(
                code=ErrorKind.MALFORMED_RESPONSE,
                message=None,
                details={"original_error": str(e)}
            )
            return None

    def _get(self, endpoint: str) -> BankingResult:
        """
        Issue a single GET and convert every failure into a result value.

        Args:
            endpoint: Path below the base URL

        Returns:
            BankingResult holding either ``data`` or a ServiceError
        """
        if not self.base_url:
            return BankingResult(error=ServiceError(
                code=ErrorKind.CONFIGURATION,
                message="The banking service is not configured."
            ))

        url = f"{self.base_url}{endpoint}"
        start_time = time.time()

        try:
            logger.info(f"Calling banking API: {url}")
            with httpx.Client(timeout=self.timeout) as client:
                response = client.get(url)
        except httpx.TimeoutException as e:
            logger.error(f"Banking API timeout after {self.timeout}s: {url}")
            return BankingResult(error=ServiceError(
                code=ErrorKind.UPSTREAM_UNAVAILABLE,
                message="The banking service took too long to respond.",
                details={"url": url, "original_error": str(e)}
            ))
        except httpx.RequestError as e:
            logger.error(f"Failed to connect to banking API at {url}: {e}")
            return BankingResult(error=ServiceError(
                code=ErrorKind.UPSTREAM_UNAVAILABLE,
                message="The banking service is currently unavailable.",
                details={"url": url, "original_error": str(e)}
            ))

        latency_ms = int((time.time() - start_time) * 1000)
        body = self._json_body(response)

        if response.status_code < 200 or response.status_code >= 300:
            logger.error(
                f"Banking API error: {response.status_code} - {response.text[:200]}"
            )
            return BankingResult(
                payload=body,
                error=ServiceError(
                    code=ErrorKind.UPSTREAM_UNAVAILABLE,
                    message=body.get("message") if body else None,
                    status_code=response.status_code,
                    details={"url": url, "latency_ms": latency_ms}
                )
            )

        if body is None or "status" not in body:
            logger.error(f"Banking API returned an unexpected body for {url}")
            return BankingResult(error=ServiceError(
                code=ErrorKind.MALFORMED_RESPONSE,
                message=None,
                status_code=response.status_code,
                details={"url": url, "body": response.text[:200]}
            ))

        if body.get("status") != "success":
            return BankingResult(
                payload=body,
                error=ServiceError(
                    code=ErrorKind.UPSTREAM_UNAVAILABLE,
                    message=body.get("message"),
                    status_code=response.status_code,
                    details={"url": url}
                )
            )

        logger.debug(f"Banking API {endpoint} succeeded in {latency_ms}ms")
        return BankingResult(data=body.get("data"), payload=body)

    @staticmethod
    def _json_body(response: httpx.Response) -> Optional[Dict[str, Any]]:
        try:
            body = response.json()
        except ValueError:
            return None
        return body if isinstance(body, dict) else None

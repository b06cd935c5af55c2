"""Robot webservice client.

Uses requests to talk to the Robot REST API with HTTP basic auth.
Responses are validated into FailoverRecord models; every failure is
raised as an ApiError subclass.

Example:
    with RobotClient(credentials) as client:
        record = client.get_failover("198.51.100.5")
        print(record.active_server_address)
"""

import logging
from typing import Any

import requests
from pydantic import ValidationError

from hetzner_failover.config import DEFAULT_BASE_URL
from hetzner_failover.credentials import Credentials
from hetzner_failover.errors import ApiError, ResponseFormatError, TransportError
from hetzner_failover.model.failover import FailoverRecord

logger = logging.getLogger(__name__)


class RobotClient:
    """Client for the failover endpoints of the Robot webservice."""

    PATH_FAILOVER = "/failover"

    def __init__(
        self,
        credentials: Credentials,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def __enter__(self) -> "RobotClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def _build_url(self, path: str) -> str:
        """Build webservice URL."""
        return f"{self.base_url}{path}"

    def _get_headers(self) -> dict[str, str]:
        """Get standard request headers."""
        return {"Accept": "application/json"}

    def _get_auth(self) -> tuple[str, str]:
        """Get authentication tuple."""
        return (self.credentials.login, self.credentials.password)

    def _request(
        self, method: str, path: str, data: dict[str, str] | None = None
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            TransportError: If no response was received
            ApiError: If the response status is not 2xx
            ResponseFormatError: If the body is not JSON
        """
        url = self._build_url(path)
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(
                method,
                url,
                headers=self._get_headers(),
                auth=self._get_auth(),
                data=data,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(
                f"Request to {url} failed: {e}",
                details={"url": url},
            ) from e

        logger.debug("%s %s -> HTTP %s", method, url, response.status_code)
        if not 200 <= response.status_code < 300:
            raise self._error_from_response(response, url)

        try:
            return response.json()
        except ValueError as e:
            raise ResponseFormatError(
                f"Invalid JSON in response from {url}",
                details={"url": url},
            ) from e

    def _error_from_response(self, response: requests.Response, url: str) -> ApiError:
        """Build an ApiError, using the Robot error body when there is one."""
        status = response.status_code
        code = None
        message = f"HTTP {status}"
        try:
            error = response.json().get("error", {})
        except (ValueError, AttributeError):
            error = {}
        if isinstance(error, dict):
            code = error.get("code")
            if error.get("message"):
                message = f"HTTP {status}: {error['message']}"
            # Robot repeats the status inside the error body
            if isinstance(error.get("status"), int):
                status = error["status"]
        return ApiError(message, status=status, code=code, details={"url": url})

    def _to_record(self, payload: Any, url: str) -> FailoverRecord:
        try:
            return FailoverRecord.from_payload(payload)
        except ValidationError as e:
            raise ResponseFormatError(
                f"Unexpected failover record from {url}: {e.error_count()} validation error(s)",
                details={"url": url},
            ) from e

    def list_failovers(self) -> list[FailoverRecord]:
        """Fetch all failover IPs of the account.

        Returns:
            Records in the order the webservice returns them
        """
        payload = self._request("GET", self.PATH_FAILOVER)
        url = self._build_url(self.PATH_FAILOVER)
        if not isinstance(payload, list):
            raise ResponseFormatError(
                f"Expected a list of failover records from {url}",
                details={"url": url},
            )
        return [self._to_record(item, url) for item in payload]

    def get_failover(self, address: str) -> FailoverRecord:
        """Fetch one failover IP.

        Args:
            address: Failover IP address

        Returns:
            The current record
        """
        path = f"{self.PATH_FAILOVER}/{address}"
        payload = self._request("GET", path)
        return self._to_record(payload, self._build_url(path))

    def update_failover(self, address: str, active_server_address: str) -> FailoverRecord:
        """Route a failover IP to another server.

        Args:
            address: Failover IP address
            active_server_address: Main IP of the server that should receive traffic

        Returns:
            The record as reported after the update
        """
        path = f"{self.PATH_FAILOVER}/{address}"
        logger.info("Routing failover IP %s to %s", address, active_server_address)
        payload = self._request(
            "POST", path, data={"active_server_ip": active_server_address}
        )
        return self._to_record(payload, self._build_url(path))

"""Shared async HTTP plumbing for the API clients."""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError

from .exceptions import APIError, DecodeError, NetworkError, RequestError, TimeoutError
from ..models.base import Record

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=Record)


class BaseClient:
    """Own one ``httpx.AsyncClient`` and issue single-shot GET requests.

    No retries are attempted: every failure is raised to the caller.
    """

    def __init__(
        self,
        base_url: str,
        verify_ssl: bool = True,
        timeout: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize client.

        Args:
            base_url: Scheme and host every endpoint path is appended to
            verify_ssl: Whether to verify TLS certificates
            timeout: Request timeout in seconds
            transport: Custom httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.verify_ssl = verify_ssl
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "BaseClient":
        """Async context manager entry.

        Returns:
            Self
        """
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit.

        Args:
            exc_type: Exception type
            exc_val: Exception value
            exc_tb: Exception traceback
        """
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        """Return the HTTP client, creating it on first use."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                verify=self.verify_ssl,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def _get_json(
        self,
        resource: str,
        url: str,
        headers: dict[str, str],
        params: dict[str, str] | None = None,
    ) -> Any:
        """GET a URL and decode its JSON body.

        Args:
            resource: Resource kind, used in error messages
            url: Absolute URL, query string included if already encoded
            headers: Request headers (credential included)
            params: Extra query parameters for httpx to encode

        Returns:
            Decoded JSON body

        Raises:
            RequestError: On a non-success status
            DecodeError: If the body is not JSON
            NetworkError: On connection errors
            TimeoutError: On timeout
            APIError: On any other httpx failure (redirect loops, bad encoding)
        """
        logger.debug("GET %s", url)
        try:
            response = await self._http().get(url, headers=headers, params=params)
        except httpx.TimeoutException:
            logger.error("Request for %s timed out: %s", resource, url)
            raise TimeoutError(f"Request to {url} timed out")
        except httpx.TransportError as e:
            logger.error("Network error while getting %s: %s", resource, e)
            raise NetworkError(f"Network error: {e}")
        except httpx.HTTPError as e:
            logger.error("HTTP error while getting %s: %s", resource, e)
            raise APIError(f"HTTP error while getting {resource}: {e}")

        if not response.is_success:
            message = self._extract_error_message(response)
            logger.error("Failed to get %s: HTTP %s %s", resource, response.status_code, message)
            raise RequestError(resource, response.status_code, message)

        try:
            return response.json()
        except ValueError as e:
            logger.error("Failed to decode %s response: %s", resource, e)
            raise DecodeError(resource, f"body is not valid JSON ({e})")

    @staticmethod
    def _decode_records(resource: str, items: Any, model: type[RecordT]) -> list[RecordT]:
        """Validate a decoded JSON array into record models.

        Args:
            resource: Resource kind, used in error messages
            items: Decoded JSON value expected to be a list of objects
            model: Record model to build

        Returns:
            Records in upstream order

        Raises:
            DecodeError: If the value is not a list of objects
        """
        if not isinstance(items, list):
            raise DecodeError(resource, f"expected a list, got {type(items).__name__}")

        records: list[RecordT] = []
        for item in items:
            if not isinstance(item, dict):
                raise DecodeError(resource, f"expected an object, got {type(item).__name__}")
            try:
                records.append(model.model_validate(item))
            except ValidationError as e:
                raise DecodeError(resource, str(e))
        return records

    @staticmethod
    def _extract_error_message(response: httpx.Response) -> str:
        """Extract error message from response.

        Args:
            response: HTTP response

        Returns:
            Reason phrase, followed by the upstream error detail when present
        """
        reason = response.reason_phrase
        try:
            data = response.json()
        except ValueError:
            return reason or response.text

        detail = None
        if isinstance(data, dict):
            # ARM: {"error": {"code": ..., "message": ...}}
            error = data.get("error")
            if isinstance(error, dict):
                detail = error.get("message") or error.get("code")
            # vCenter: {"error_type": ..., "messages": [{"default_message": ...}]}
            messages = data.get("messages")
            if not detail and isinstance(messages, list):
                detail = "; ".join(
                    str(m.get("default_message", "")) for m in messages if isinstance(m, dict)
                )
            if not detail:
                detail = data.get("error_type") or data.get("message")

        if detail and reason:
            return f"{reason}: {detail}"
        return detail or reason or ""

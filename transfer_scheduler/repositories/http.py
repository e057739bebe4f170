"""Transfer repository backed by the transfer HTTP API."""

from typing import Any

import httpx

from transfer_scheduler.config import ApiConfig
from transfer_scheduler.exceptions import RepositoryError, TransferNotFoundError
from transfer_scheduler.logging import get_logger
from transfer_scheduler.models.request import TransferRequest
from transfer_scheduler.repositories.base import TransferRepository, TransferResponse
from transfer_scheduler.serialization import request_to_payload

logger = get_logger(__name__)


class HttpTransferRepository(TransferRepository):
    """Call the transfer API with an ``httpx.AsyncClient``.

    Parameters
    ----------
    config : ApiConfig | None
        Base URL and timeout. Defaults to ``ApiConfig()``.
    client : httpx.AsyncClient | None
        Client to reuse; one is created (and owned) when omitted.
    """

    def __init__(
        self,
        config: ApiConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or ApiConfig()
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )

    async def __aenter__(self) -> "HttpTransferRepository":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying client if this repository created it."""
        if self._owns_client:
            await self.client.aclose()

    async def schedule_transfer(self, request: TransferRequest) -> TransferResponse:
        return await self._request("POST", "/transfers", json=request_to_payload(request))

    async def get_all_transfers(self) -> list[TransferResponse]:
        transfers = await self._request("GET", "/transfers")
        if not isinstance(transfers, list):
            logger.warning(
                "Transfer service returned %s instead of a list of transfers",
                type(transfers).__name__,
                extra={"method": "GET", "path": "/transfers"},
            )
            return []
        return transfers

    async def get_transfer_by_id(self, transfer_id: str) -> TransferResponse:
        return await self._request("GET", f"/transfers/{transfer_id}")

    async def update_transfer(self, request: TransferRequest) -> TransferResponse:
        return await self._request("PUT", f"/transfers/{request.id}", json=request_to_payload(request))

    async def delete_transfer(self, transfer_id: str) -> None:
        await self._request("DELETE", f"/transfers/{transfer_id}")

    async def clear_all_transfers(self) -> None:
        await self._request("DELETE", "/transfers")

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        logger.debug("HTTP request: %s %s", method, url)
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            logger.error("HTTP transport error: %s", exc, extra={"method": method, "path": url})
            raise RepositoryError(
                "Unable to connect to the transfer service. Please ensure the backend is running."
            ) from exc

        logger.debug("HTTP response: %s %s", response.status_code, url)

        if response.status_code == 404:
            raise TransferNotFoundError(_extract_message(response) or "Transfer not found")
        if response.is_error:
            message = _extract_message(response)
            logger.warning(
                "Transfer service returned an error: %s",
                message,
                extra={"status_code": response.status_code, "method": method, "path": url},
            )
            if response.status_code >= 500:
                message = "Transfer service error. Please try again later."
            raise RepositoryError(message or "Unexpected response from the transfer service", response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise RepositoryError("Transfer service returned an invalid JSON body", response.status_code) from exc


def _extract_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return response.text or None
    if isinstance(body, dict):
        return body.get("message") or body.get("error")
    return None

from typing import Any

import httpx

from .base import TutorGateway
from .models import (
    GatewayOutcome,
    GatewayRejected,
    GatewayReply,
    TransportFailure,
    TutorRequest,
)


class HttpTutorGateway(TutorGateway):
    """Tutor gateway speaking JSON over HTTP.

    Hidden design decisions:
    - httpx client initialization and timeout policy
    - Wire format of the request body
    - Which response shapes count as a reply, a rejection or a broken exchange
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float | None = 30.0,
        **client_kwargs: Any
    ):
        """Initialize the HTTP gateway.

        Args:
            endpoint: Absolute URL the message is POSTed to
            timeout: Seconds to wait for the whole exchange (None waits forever)
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._endpoint = endpoint
        self._timeout = timeout
        self._client = httpx.AsyncClient(timeout=timeout, **client_kwargs)

    @property
    def endpoint(self) -> str:
        """Get the configured endpoint URL."""
        return self._endpoint

    @property
    def timeout(self) -> float | None:
        """Get the request timeout in seconds."""
        return self._timeout

    @property
    def gateway_type(self) -> str:
        return "http"

    async def ask(self, message: str) -> GatewayOutcome:
        """POST the message and classify the response.

        Args:
            message: Trimmed user text

        Returns:
            GatewayReply for 2xx JSON objects, GatewayRejected for any other
            status, TransportFailure when the exchange broke down or a 2xx
            body is not a JSON object
        """
        body = TutorRequest(message=message).model_dump()

        try:
            response = await self._client.post(self._endpoint, json=body)
        except httpx.HTTPError as e:
            return TransportFailure(reason=str(e) or type(e).__name__)

        if not response.is_success:
            return GatewayRejected(
                status_code=response.status_code,
                error=_read_field(response, "error")
            )

        try:
            data = response.json()
        except ValueError as e:
            return TransportFailure(reason=f"Malformed response body: {e}")

        if not isinstance(data, dict):
            return TransportFailure(
                reason=f"Malformed response body: expected an object, got {type(data).__name__}"
            )

        return GatewayReply(reply=_string_or_none(data.get("reply")))

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()


def _read_field(response: httpx.Response, field: str) -> str | None:
    """Pull a string field out of a JSON object body, if there is one."""
    try:
        data = response.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    return _string_or_none(data.get(field))


def _string_or_none(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None

"""HTTP transport for provider requests."""

import logging
from typing import Any, Protocol

import requests
from pydantic import BaseModel, Field

from place_aggregator.config import SourceSettings
from place_aggregator.exceptions import UpstreamError
from place_aggregator.models import SourceTag

logger = logging.getLogger(__name__)


class SourceRequest(BaseModel):
    """A fully described outbound call, built by a source adapter.

    Attributes:
        source: The provider this request targets.
        method: HTTP method.
        url: Target URL.
        params: Query string parameters.
        data: Raw request body, if any.
        headers: Extra headers merged over the transport defaults.
    """

    source: SourceTag
    method: str = "GET"
    url: str
    params: dict[str, str] = Field(default_factory=dict)
    data: str | None = None
    headers: dict[str, str] = Field(default_factory=dict)


class Transport(Protocol):
    """Anything that can execute a SourceRequest and return its decoded body."""

    def send(self, request: SourceRequest) -> Any: ...


class HttpTransport:
    """Executes provider requests with ``requests``.

    Attributes:
        settings (SourceSettings): Provider settings (timeout, headers).
        session (requests.Session): Shared connection pool.
    """

    def __init__(self, settings: SourceSettings, session: requests.Session | None = None) -> None:
        """Initialize the transport.

        Args:
            settings: Provider settings.
            session: Optional pre-configured session, mostly for tests.
        """
        self.settings = settings
        self.session = session or requests.Session()

    def send(self, request: SourceRequest) -> Any:
        """Send the request and decode its JSON body.

        Args:
            request: The request to execute.

        Returns:
            The decoded JSON body.

        Raises:
            UpstreamError: On network failure, non-success status or an
                undecodable body.
        """
        headers = {**self.settings.headers, **request.headers}
        logger.debug(f"{request.method} {request.url} params={request.params}")
        try:
            response = self.session.request(
                request.method,
                request.url,
                params=request.params or None,
                data=request.data.encode("utf-8") if request.data is not None else None,
                headers=headers,
                timeout=self.settings.timeout,
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exception:
            raise UpstreamError(request.source, str(exception)) from exception
        except ValueError as exception:
            # JSON decoding errors
            raise UpstreamError(request.source, f"invalid JSON body: {exception}") from exception

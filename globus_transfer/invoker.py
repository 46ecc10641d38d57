"""
Sends a built request with httpx and wraps whatever comes back.
One request per call: no retries, no caching.
"""

import time
from typing import Optional

import httpx
import structlog

from .config import DEFAULT_USER_AGENT
from .errors import TransportError
from .models import Outcome, RequestDescriptor

logger = structlog.get_logger(__name__)


class HTTPInvoker:
    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the invoker around a single httpx.AsyncClient.

        Args:
            timeout: Seconds before a request is abandoned.
            user_agent: Sent on every request.
            transport: Optional httpx transport, e.g. ``httpx.MockTransport``.
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={'User-Agent': user_agent},
            transport=transport,
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    async def send(self, request: RequestDescriptor) -> Outcome:
        """Send ``request`` and return the service's answer.

        Raises:
            TransportError: The request failed on the wire, or the service
                answered with a non-2xx status and no JSON body.
        """
        log = logger.bind(operation=request.operation, method=request.method, url=request.url)
        log.debug("request_sent", headers=request.redacted_headers())

        start_time = time.time()
        try:
            response = await self._client.request(
                request.method,
                request.url,
                headers=request.headers,
                json=request.body,
            )
        except httpx.TimeoutException as e:
            log.warning("transport_error", error=f"timeout after {self.timeout}s")
            raise TransportError(f"Timeout after {self.timeout}s: {e}", url=request.url) from e
        except httpx.ConnectError as e:
            log.warning("transport_error", error=str(e))
            raise TransportError(f"Connection error: {e}", url=request.url) from e
        except httpx.HTTPError as e:
            log.warning("transport_error", error=str(e))
            raise TransportError(f"HTTP error: {e}", url=request.url) from e

        elapsed = time.time() - start_time
        body = self._parse_json(response)

        if body is None and response.is_error:
            log.warning("transport_error", status=response.status_code, error="non-JSON error body")
            raise TransportError(
                f"HTTP {response.status_code}",
                url=request.url,
                status_code=response.status_code,
                body=response.text,
            )

        outcome = Outcome(
            operation=request.operation,
            status_code=response.status_code,
            body=body,
            text=response.text,
            url=str(response.url),
            elapsed=elapsed,
        )
        log.debug("response_received", status=response.status_code, code=outcome.code, elapsed=elapsed)
        return outcome

    def _parse_json(self, response: httpx.Response):
        """Parse the body as JSON, or None when it is empty or not JSON."""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

"""HTTP client for forwarding tool calls to remote backends."""

import time

import httpx
import structlog

from .schemas import RemoteCallSpec, RemoteCallResult
from .exceptions import (
    BackendTimeoutError,
    BackendUnavailableError,
    BackendError,
    InvalidRemoteRequestError,
)


logger = structlog.get_logger(__name__)

# Default timeout for backend requests
DEFAULT_TIMEOUT_SECONDS = 30.0


class RemoteInvoker:
    """Performs the outbound call for a tool.

    Every failure leaves through one channel: a ``RemoteCallError`` subclass.
    HTTP error statuses are not failures; their JSON body is relayed.

    Attributes:
        base_urls: Base address per call target.
        timeout: Per-call timeout in seconds.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_urls: dict[str, str],
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the invoker.

        Args:
            client: Shared HTTP client.
            base_urls: Base address for each target (``backend``, ``gateway``).
            timeout: Per-call timeout in seconds.
        """
        self._client = client
        self.base_urls = {target: url.rstrip("/") for target, url in base_urls.items()}
        self.timeout = timeout

    def resolve_url(self, spec: RemoteCallSpec) -> str:
        """Absolute URL for a call spec."""
        try:
            base_url = self.base_urls[spec.target]
        except KeyError:
            raise BackendUnavailableError(
                backend_url=spec.path,
                reason=f"No base address configured for target '{spec.target}'"
            ) from None
        return f"{base_url}{spec.path}"

    async def invoke(self, spec: RemoteCallSpec) -> RemoteCallResult:
        """Execute one remote call.

        Args:
            spec: The call to perform.

        Returns:
            RemoteCallResult with the decoded JSON payload.

        Raises:
            BackendTimeoutError: If the backend doesn't respond in time.
            BackendUnavailableError: If the connection or request fails.
            InvalidRemoteRequestError: If headers or body cannot be encoded.
            BackendError: If the response body is not JSON.
        """
        url = self.resolve_url(spec)
        # Query strings may carry credentials; report the bare URL only
        display_url = url.split("?", 1)[0]

        request_kwargs: dict = {"headers": spec.headers, "timeout": self.timeout}
        if spec.body is not None:
            request_kwargs["json"] = spec.body
        elif spec.method != "GET":
            request_kwargs["content"] = b""

        started = time.perf_counter()
        try:
            response = await self._client.request(spec.method, url, **request_kwargs)
        except httpx.TimeoutException:
            raise BackendTimeoutError(
                backend_url=display_url,
                timeout_seconds=self.timeout
            )
        except httpx.ConnectError as e:
            raise BackendUnavailableError(
                backend_url=display_url,
                reason=str(e)
            )
        except httpx.RequestError as e:
            raise BackendUnavailableError(
                backend_url=display_url,
                reason=f"Request failed: {e}"
            )
        except ValueError as e:
            # Non-ASCII header value or non-finite float in the body
            raise InvalidRemoteRequestError(
                backend_url=display_url,
                error_type=type(e).__name__
            ) from None
        duration_ms = int((time.perf_counter() - started) * 1000)

        try:
            payload = response.json()
        except ValueError:
            raise BackendError(
                backend_url=display_url,
                status_code=response.status_code,
                detail=response.text[:200]  # Truncate for safety
            )

        logger.info(
            "remote_call",
            tool_name=spec.tool_name,
            method=spec.method,
            url=display_url,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        return RemoteCallResult(
            status_code=response.status_code,
            payload=payload,
            duration_ms=duration_ms,
        )

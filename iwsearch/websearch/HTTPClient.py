import httpx
from typing import Any, Dict, Optional
from ..core.logging import get_logger
from ..core.settings import settings

logger = get_logger(__name__)


class ProviderError(Exception):
    """The upstream API answered, but not with a usable payload."""


class NetworkError(Exception):
    """The request never produced a response."""


class HTTPClient:
    """
    Pooled async HTTP access to the Incarnate Word API.
    Paths are joined onto base_url by httpx; errors are mapped to
    ProviderError / NetworkError in one place.
    """
    def __init__(
        self,
        base_url: Optional[str] = None,
        default_headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None,
    ) -> None:
        self.base_url = (base_url if base_url is not None else settings.base_url).rstrip("/")
        self.timeout = httpx.Timeout(
            timeout if timeout is not None else settings.http_timeout_seconds,
            connect=connect_timeout if connect_timeout is not None else settings.http_connect_timeout_seconds,
        )

        self.headers = {
            "User-Agent": "iwsearch/0.1 (+https://incarnateword.in)",
            "Accept": "application/json",
        }
        if default_headers:
            self.headers.update(default_headers)

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self.headers,
            follow_redirects=True
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HTTPClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """GET a path and return the decoded JSON body."""
        return await self._request("GET", url, params=params)

    async def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        try:
            response = await self._client.request(
                method=method,
                url=url,
                params=params,
            )

            response.raise_for_status()
            try:
                return response.json()
            except ValueError as e:
                logger.error(
                    f"HTTP {method} returned a non-JSON body",
                    extra={"url": url, "response": response.text[:200]}
                )
                raise ProviderError(f"Provider Error: invalid JSON from {url}") from e

        except httpx.HTTPStatusError as e:
            logger.error(
                f"HTTP {method} {e.response.status_code}",
                extra={"url": str(e.request.url), "response": e.response.text[:200]}
            )
            raise ProviderError(f"Provider Error: {e.response.status_code}") from e

        except httpx.RequestError as e:
            logger.error(f"Network Error: {method} {url}", extra={"error": str(e)})
            raise NetworkError(f"Network Failure: {str(e)}") from e

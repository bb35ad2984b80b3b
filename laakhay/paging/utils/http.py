"""HTTP page source for JSON APIs that paginate with a continuation token."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import aiohttp

from ..config import DEFAULT_HTTP_TIMEOUT, DEFAULT_NEXT_TOKEN_KEY, DEFAULT_PAGE_TOKEN_FIELD
from ..core.exceptions import PageFetchError
from ..core.protocols import PageFetchOperation
from ..core.query import Query, next_page_query, strip_control_fields
from ..models import Page
from ..runtime.adapters import from_coroutine


class HTTPClient:
    """Async HTTP client wrapper."""

    def __init__(self, base_url: str | None = None, timeout: float = DEFAULT_HTTP_TIMEOUT) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def build_url(self, url: str) -> str:
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"
        return url

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """GET request returning the decoded JSON body.

        Raises:
            PageFetchError: On a non-2xx status or a transport failure
        """
        try:
            async with self.session.get(
                self.build_url(url), params=params, headers=headers
            ) as response:
                if response.status >= 400:
                    body = await response.text()
                    raise PageFetchError(
                        f"GET {url} failed with HTTP {response.status}",
                        status_code=response.status,
                        response=body,
                    )
                return await response.json()
        except aiohttp.ClientError as e:
            raise PageFetchError(f"GET {url} failed: {e}") from e

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()


class HTTPPageSource:
    """Page source for one token-paginated JSON list endpoint.

    Each response is expected to carry the page's items under ``items_key``
    and, when more pages exist, a token under ``next_token_key``. The next
    query is the previous one with the token stored in ``token_field``.

    Example:
        async with HTTPClient(base_url="https://api.example.com/v2") as client:
            source = HTTPPageSource(client, "/datasets", items_key="datasets")
            list_datasets = paginate(source.operation)
            async for dataset in list_datasets({"all": True}):
                ...
    """

    def __init__(
        self,
        client: HTTPClient,
        path: str,
        *,
        items_key: str = "items",
        next_token_key: str = DEFAULT_NEXT_TOKEN_KEY,
        token_field: str = DEFAULT_PAGE_TOKEN_FIELD,
        shorthand_field: str | None = None,
    ) -> None:
        """Initialize the page source.

        Args:
            client: HTTP client used for requests
            path: Endpoint path (joined to the client's base URL)
            items_key: Response field holding the page's items
            next_token_key: Response field holding the next page token
            token_field: Query parameter carrying the token on follow-ups
            shorthand_field: Query parameter a string query is expanded into
                (string queries are rejected when unset)
        """
        self._client = client
        self._path = path
        self._items_key = items_key
        self._next_token_key = next_token_key
        self._token_field = token_field
        self._shorthand_field = shorthand_field
        self.operation: PageFetchOperation = from_coroutine(self.fetch_page)

    def expand_query(self, query: Query | None) -> dict[str, Any]:
        """Return ``query`` as a mapping, expanding string shorthand."""
        if query is None:
            return {}
        if isinstance(query, str):
            if self._shorthand_field is None:
                raise PageFetchError(f"{self._path} does not accept a string query")
            return {self._shorthand_field: query}
        if isinstance(query, Mapping):
            return dict(query)
        raise PageFetchError(f"Unsupported query type {type(query).__name__}")

    async def fetch_page(self, query: Query | None) -> Page:
        """Fetch one page and derive the query for the next one."""
        base = self.expand_query(query)
        response = await self._client.get(self._path, params=_encode_params(base))

        items = response.get(self._items_key) or []
        token = response.get(self._next_token_key)

        return Page(
            items=list(items),
            next_query=next_page_query(base, token, token_field=self._token_field),
            raw_response=response,
        )


def _encode_params(query: Mapping[str, Any]) -> dict[str, str]:
    """Query string params: drop router flags and None, lower-case booleans."""
    params: dict[str, str] = {}
    for key, value in strip_control_fields(query).items():
        if value is None:
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        else:
            params[key] = str(value)
    return params

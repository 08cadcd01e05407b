"""Shared httpx plumbing for the upstream JSON feeds."""

from __future__ import annotations

from typing import Any, Mapping, Optional

import httpx

from playersb.errors import FetchError


USER_AGENT = "playersb-site"


class JsonClient:
    """Thin wrapper over :class:`httpx.Client` that raises :class:`FetchError`."""

    def __init__(
        self,
        base_url: str = "",
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        merged_headers = {"User-Agent": USER_AGENT}
        merged_headers.update(headers or {})
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=base_url,
            headers=merged_headers,
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
        )

    def get_json(self, url: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        try:
            response = self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise FetchError(url, f"fetch failed: {url} ({exc})") from exc
        if response.status_code != 200:
            raise FetchError(
                str(response.request.url),
                f"fetch failed: {response.request.url} ({response.status_code}) {response.text[:200]}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(str(response.request.url), f"invalid JSON from {response.request.url}") from exc

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

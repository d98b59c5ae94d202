# HTTP client for the /files endpoint.
# Created: 2026-10-19

from __future__ import annotations

import logging

import httpx

from latestview.directory import Entry, Listing

logger = logging.getLogger(__name__)

FILES_ENDPOINT = "/api/v1/files"


class FilesClientError(Exception):
    """A listing or read request failed (transport, status or payload)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class FilesClient:
    """Async client for a latestview server.

    Pass ``http`` to reuse an existing ``httpx.AsyncClient`` (tests hand in
    one bound to an ``ASGITransport``); otherwise one is created and owned.
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8888",
        timeout: float = 10.0,
        http: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> FilesClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def list_directory(self, path: str | None = None) -> Listing:
        params = {"path": path} if path else {}
        data = await self._get(params)
        try:
            return Listing(
                path=data["path"],
                entries=[
                    Entry(
                        name=item["name"],
                        path=item["path"],
                        is_directory=bool(item["isDirectory"]),
                        mtime=int(item["mtime"]),
                    )
                    for item in data["files"]
                ],
            )
        except (KeyError, TypeError, ValueError) as e:
            raise FilesClientError(f"Malformed listing payload: {e!r}") from e

    async def read_file(self, path: str) -> str:
        data = await self._get({"path": path, "action": "read"})
        content = data.get("content")
        if not isinstance(content, str):
            raise FilesClientError("Malformed read payload: missing 'content'")
        return content

    async def _get(self, params: dict[str, str]) -> dict:
        try:
            resp = await self._http.get(FILES_ENDPOINT, params=params)
        except httpx.HTTPError as e:
            raise FilesClientError(f"Request to {FILES_ENDPOINT} failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise FilesClientError(
                f"Non-JSON response ({resp.status_code})", status_code=resp.status_code
            ) from e

        if resp.status_code >= 400:
            message = data.get("error") if isinstance(data, dict) else None
            raise FilesClientError(
                message or f"HTTP {resp.status_code}", status_code=resp.status_code
            )
        if not isinstance(data, dict):
            raise FilesClientError("Malformed payload: expected a JSON object")
        return data

"""Simple HTTP client utilities using httpx."""

from __future__ import annotations

from typing import Any, Dict

import httpx


async def get_json(
    url: str,
    headers: Dict[str, str],
    *,
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    """Perform an asynchronous HTTP GET request and decode the JSON body.

    Raises :class:`httpx.HTTPStatusError` for non-success responses and
    :class:`ValueError` when the body is not valid JSON.
    """
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        response = await client.get(url, headers=headers)
        response.raise_for_status()
        return response.json()

"""
Boundary to the external pricing executor.

The executor is told to start a run and reports back later through the
loan-pricer webhook. Nothing here waits for the pricing work itself; a
successful trigger only means the executor accepted the request.
"""
from __future__ import annotations

from typing import Any, Protocol

import httpx

from config import settings
from services.errors import ExecutorError


class PricingExecutor(Protocol):
    async def trigger(self, run_id: str) -> dict[str, Any] | None:
        """Ask the executor to start ``run_id``. Raise ExecutorError if the call cannot be made."""
        ...


class HttpPricingExecutor:
    def __init__(
        self,
        url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url if url is not None else settings.executor_url
        self.api_key = api_key if api_key is not None else settings.executor_api_key
        self.timeout = timeout if timeout is not None else settings.executor_timeout_seconds
        self._transport = transport

    async def trigger(self, run_id: str) -> dict[str, Any] | None:
        if not self.url:
            raise ExecutorError("executor_url not configured")
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.post(self.url, headers=headers, json={"run_id": run_id})
        except httpx.HTTPError as e:
            raise ExecutorError(f"executor request failed: {e}") from e

        if r.status_code >= 400:
            raise ExecutorError(f"executor returned {r.status_code}: {r.text[:300]}")
        try:
            body = r.json()
        except ValueError:
            return {"status_code": r.status_code, "body": r.text[:300]}
        return body if isinstance(body, dict) else {"status_code": r.status_code, "body": body}


def get_executor() -> PricingExecutor:
    return HttpPricingExecutor()

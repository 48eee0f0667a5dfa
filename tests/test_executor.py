"""
HTTP executor client: request shape and failure mapping.
"""
import json
import unittest

import httpx

from services.errors import ExecutorError
from services.executor import HttpPricingExecutor


class TestHttpPricingExecutor(unittest.IsolatedAsyncioTestCase):
    async def test_posts_run_id_with_bearer_token(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(202, json={"queued": True})

        executor = HttpPricingExecutor(
            url="https://pricer.example.com/runs",
            api_key="secret",
            transport=httpx.MockTransport(handler),
        )
        result = await executor.trigger("run-abc")

        self.assertEqual(result, {"queued": True})
        self.assertEqual(seen["url"], "https://pricer.example.com/runs")
        self.assertEqual(seen["auth"], "Bearer secret")
        self.assertEqual(seen["body"], {"run_id": "run-abc"})

    async def test_error_status_raises(self):
        executor = HttpPricingExecutor(
            url="https://pricer.example.com/runs",
            api_key="",
            transport=httpx.MockTransport(lambda request: httpx.Response(503, text="busy")),
        )
        with self.assertRaises(ExecutorError) as ctx:
            await executor.trigger("run-abc")
        self.assertIn("503", str(ctx.exception))

    async def test_transport_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        executor = HttpPricingExecutor(url="https://pricer.example.com/runs", transport=httpx.MockTransport(handler))
        with self.assertRaises(ExecutorError):
            await executor.trigger("run-abc")

    async def test_non_json_response(self):
        executor = HttpPricingExecutor(
            url="https://pricer.example.com/runs",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, text="ok")),
        )
        self.assertEqual(await executor.trigger("run-abc"), {"status_code": 200, "body": "ok"})

    async def test_unconfigured_url_raises(self):
        executor = HttpPricingExecutor(url="")
        with self.assertRaises(ExecutorError):
            await executor.trigger("run-abc")

import json
import unittest

import httpx

from chat_client.config import DEFAULT_BACKEND_URL
from chat_client.relay_client import (
    CONNECTION_ERROR_MESSAGE,
    FALLBACK_ERROR_MESSAGE,
    HEALTH_CHECK_TIMEOUT_SECONDS,
    RelayCallError,
    RelayClient,
)


def _client(handler) -> RelayClient:
    return RelayClient(DEFAULT_BACKEND_URL, transport=httpx.MockTransport(handler))


class RelayClientTests(unittest.TestCase):
    def test_send_message_posts_json_and_returns_reply(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200, json={"message": "Hi there", "timestamp": "2026-01-01T10:00:00.000Z"}
            )

        reply = _client(handler).send_message("Hello")

        self.assertEqual(reply.message, "Hi there")
        self.assertEqual(reply.timestamp, "2026-01-01T10:00:00.000Z")
        self.assertEqual(seen[0].method, "POST")
        self.assertEqual(seen[0].url.path, "/api/chat")
        self.assertEqual(json.loads(seen[0].content), {"message": "Hello"})

    def test_server_error_string_is_surfaced(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"error": "Invalid API key."})

        with self.assertRaises(RelayCallError) as ctx:
            _client(handler).send_message("Hello")

        self.assertEqual(ctx.exception.message, "Invalid API key.")
        self.assertEqual(ctx.exception.status_code, 401)

    def test_error_without_body_uses_fallback(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad Gateway")

        with self.assertRaises(RelayCallError) as ctx:
            _client(handler).send_message("Hello")

        self.assertEqual(ctx.exception.message, FALLBACK_ERROR_MESSAGE)

    def test_unreachable_server_uses_connection_message(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with self.assertRaises(RelayCallError) as ctx:
            _client(handler).send_message("Hello")

        self.assertEqual(ctx.exception.message, CONNECTION_ERROR_MESSAGE)
        self.assertIsNone(ctx.exception.status_code)

    def test_malformed_success_body_uses_fallback(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"unexpected": True})

        with self.assertRaises(RelayCallError) as ctx:
            _client(handler).send_message("Hello")

        self.assertEqual(ctx.exception.message, FALLBACK_ERROR_MESSAGE)

    def test_non_string_reply_fields_use_fallback(self) -> None:
        bodies = [
            {"message": None, "timestamp": "2026-01-01T10:00:00.000Z"},
            {"message": 42, "timestamp": "2026-01-01T10:00:00.000Z"},
            {"message": "Hi there", "timestamp": None},
            ["Hi there"],
        ]
        for body in bodies:
            with self.subTest(body=body):

                def handler(request: httpx.Request, body=body) -> httpx.Response:
                    return httpx.Response(200, json=body)

                with self.assertRaises(RelayCallError) as ctx:
                    _client(handler).send_message("Hello")

                self.assertEqual(ctx.exception.message, FALLBACK_ERROR_MESSAGE)
                self.assertEqual(ctx.exception.status_code, 200)

    def test_check_health_uses_short_timeout(self) -> None:
        timeouts: dict[str, dict] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            timeouts[request.url.path] = request.extensions["timeout"]
            if request.url.path == "/health":
                return httpx.Response(200, json={"status": "ok", "message": "Server is running"})
            return httpx.Response(
                200, json={"message": "Hi there", "timestamp": "2026-01-01T10:00:00.000Z"}
            )

        client = _client(handler)
        self.assertTrue(client.check_health())
        client.send_message("Hello")

        self.assertEqual(timeouts["/health"]["read"], HEALTH_CHECK_TIMEOUT_SECONDS)
        self.assertEqual(timeouts["/health"]["connect"], HEALTH_CHECK_TIMEOUT_SECONDS)
        self.assertIsNone(timeouts["/api/chat"]["read"])

    def test_check_health(self) -> None:
        def healthy(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"status": "ok", "message": "Server is running"})

        def unreachable(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        self.assertTrue(_client(healthy).check_health())
        self.assertFalse(_client(unreachable).check_health())


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

import sys
from pathlib import Path
import unittest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
API_CODE_PATH = PROJECT_ROOT / "api-code"
if str(API_CODE_PATH) not in sys.path:
    sys.path.insert(0, str(API_CODE_PATH))

from domain import ReplySource, UpstreamFailureKind
from services import GeminiChatService, GeminiClient, UpstreamError

from tests.stubs import StubGeminiClient


class StaticModeTest(unittest.IsolatedAsyncioTestCase):
    async def test_echoes_without_api_key(self) -> None:
        service = GeminiChatService(api_key=None)

        response = await service.relay("hello")

        self.assertEqual(response.reply, "Echo (No API key configured): hello")
        self.assertEqual(response.source, ReplySource.STATIC)
        self.assertIsNone(response.error)
        self.assertFalse(service.configured)
        self.assertEqual(service.mode, ReplySource.STATIC)

    async def test_blank_api_key_counts_as_missing(self) -> None:
        service = GeminiChatService(api_key="   ")

        response = await service.relay("hi")

        self.assertIsNone(service.client)
        self.assertEqual(response.source, ReplySource.STATIC)

    async def test_injected_client_is_ignored_without_api_key(self) -> None:
        stub = StubGeminiClient(reply="Hi there")
        service = GeminiChatService(api_key=None, client=stub)

        response = await service.relay("hello")

        self.assertFalse(service.configured)
        self.assertIsNone(service.client)
        self.assertEqual(response.source, ReplySource.STATIC)
        self.assertEqual(stub.prompts, [])

    async def test_message_is_echoed_verbatim(self) -> None:
        service = GeminiChatService(api_key=None)

        for message in ("  padded  ", "multi\nline", "ünïcödé ✓"):
            response = await service.relay(message)
            self.assertEqual(response.reply, "Echo (No API key configured): " + message)

    async def test_rejects_empty_and_whitespace_messages(self) -> None:
        for api_key in (None, "test-key"):
            stub = StubGeminiClient(reply="unused")
            service = GeminiChatService(api_key=api_key, client=stub if api_key else None)
            for message in ("", "   ", "\n\t"):
                with self.assertRaises(ValueError):
                    await service.relay(message)
            self.assertEqual(stub.prompts, [])


class UpstreamModeTest(unittest.IsolatedAsyncioTestCase):
    async def test_builds_gemini_client_from_api_key(self) -> None:
        service = GeminiChatService(
            api_key="test-key", model_name="gemini-test", timeout_seconds=5
        )

        self.assertIsInstance(service.client, GeminiClient)
        assert service.client is not None
        self.assertEqual(service.client.api_key, "test-key")
        self.assertEqual(service.client.model_name, "gemini-test")
        self.assertEqual(service.client.timeout_seconds, 5)
        self.assertEqual(service.mode, ReplySource.UPSTREAM)

    async def test_returns_upstream_reply(self) -> None:
        stub = StubGeminiClient(reply="Hi there")
        service = GeminiChatService(api_key="test-key", client=stub)

        response = await service.relay("hello")

        self.assertEqual(response.reply, "Hi there")
        self.assertEqual(response.source, ReplySource.UPSTREAM)
        self.assertIsNone(response.error)
        self.assertEqual(stub.prompts, ["hello"])

    async def test_falls_back_for_every_failure_kind(self) -> None:
        for kind in UpstreamFailureKind:
            error = UpstreamError(kind, f"{kind.value} happened")
            service = GeminiChatService(api_key="test-key", client=StubGeminiClient(error=error))

            with self.assertLogs("chat-relay.chat", level="WARNING") as logs:
                response = await service.relay("hello")

            self.assertEqual(response.source, ReplySource.FALLBACK)
            self.assertEqual(response.reply, "Echo (Gemini unavailable): hello")
            self.assertEqual(response.error, f"{kind.value} happened")
            self.assertIn(kind.value, logs.output[0])

    async def test_non_upstream_errors_propagate(self) -> None:
        stub = StubGeminiClient(error=RuntimeError("bug in relay"))
        service = GeminiChatService(api_key="test-key", client=stub)

        with self.assertRaises(RuntimeError):
            await service.relay("hello")

    async def test_repeated_requests_yield_identical_responses(self) -> None:
        error = UpstreamError(
            UpstreamFailureKind.HTTP_STATUS, "Gemini API error: 503 - overloaded", status_code=503
        )
        for stub in (StubGeminiClient(reply="Hi there"), StubGeminiClient(error=error)):
            service = GeminiChatService(api_key="test-key", client=stub)

            first = await service.relay("same message")
            second = await service.relay("same message")

            self.assertEqual(first.model_dump_json(), second.model_dump_json())


if __name__ == "__main__":
    unittest.main()

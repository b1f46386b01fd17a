import unittest
from unittest.mock import Mock

import httpx
import openai
from google.genai import errors as genai_errors

from chat_relay.providers.gemini_provider import GeminiChatProvider
from chat_relay.providers.openai_provider import OpenAIChatProvider


class GeminiChatProviderTests(unittest.TestCase):
    def test_invoke_passes_message_and_maps_usage(self) -> None:
        client = object()
        usage = Mock(prompt_token_count=3, candidates_token_count=9)
        invoke = Mock(return_value=Mock(text="Hi there", usage_metadata=usage, response_id="g-1"))
        provider = GeminiChatProvider(get_client=Mock(return_value=client), invoke_generate_content=invoke)

        response = provider.invoke("Hello", "gemini-2.5-flash")

        invoke.assert_called_once_with(client, "gemini-2.5-flash", "Hello")
        self.assertEqual(response.message, "Hi there")
        self.assertEqual(response.response_id, "g-1")
        self.assertEqual(response.input_tokens, 3)
        self.assertEqual(response.output_tokens, 9)

    def test_invoke_returns_empty_string_when_response_has_no_text(self) -> None:
        invoke = Mock(return_value=Mock(text=None, usage_metadata=None, response_id=None))
        provider = GeminiChatProvider(get_client=Mock(), invoke_generate_content=invoke)

        response = provider.invoke("Hello", "gemini-2.5-flash")

        self.assertEqual(response.message, "")
        self.assertEqual(response.response_id, "")
        self.assertIsNone(response.input_tokens)

    def test_is_credential_error(self) -> None:
        provider = GeminiChatProvider(get_client=Mock(), invoke_generate_content=Mock())
        unauthenticated = genai_errors.ClientError(
            401,
            {"error": {"code": 401, "message": "Invalid credentials", "status": "UNAUTHENTICATED"}},
        )

        self.assertTrue(provider.is_credential_error(unauthenticated))
        self.assertTrue(
            provider.is_credential_error(RuntimeError("API key not valid. Please pass a valid API key."))
        )
        self.assertFalse(provider.is_credential_error(RuntimeError("503 UNAVAILABLE")))


class OpenAIChatProviderTests(unittest.TestCase):
    def test_invoke_uses_responses_api(self) -> None:
        client = object()
        response_obj = Mock(
            output_text="Hi there",
            model="gpt-4.1-mini",
            id="resp_1",
            usage=Mock(input_tokens=4, output_tokens=6),
        )
        invoke = Mock(return_value=response_obj)
        provider = OpenAIChatProvider(get_openai_client=Mock(return_value=client), invoke_responses=invoke)

        response = provider.invoke("Hello", "gpt-4.1-mini")

        invoke.assert_called_once_with(client, {"model": "gpt-4.1-mini", "input": "Hello"})
        self.assertEqual(response.message, "Hi there")
        self.assertEqual(response.response_id, "resp_1")
        self.assertEqual(response.input_tokens, 4)
        self.assertEqual(response.output_tokens, 6)

    def test_is_credential_error(self) -> None:
        provider = OpenAIChatProvider(get_openai_client=Mock(), invoke_responses=Mock())
        request = httpx.Request("POST", "https://api.openai.com/v1/responses")
        auth_error = openai.AuthenticationError(
            "Incorrect credentials", response=httpx.Response(401, request=request), body=None
        )

        self.assertTrue(provider.is_credential_error(auth_error))
        self.assertTrue(provider.is_credential_error(RuntimeError("Incorrect API key provided")))
        self.assertFalse(provider.is_credential_error(RuntimeError("rate limited")))


if __name__ == "__main__":
    unittest.main()

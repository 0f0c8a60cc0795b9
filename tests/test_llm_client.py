"""
Tests for the LLM client provider fallback.
"""
from unittest.mock import MagicMock, patch

import pytest

from civic_chat.core.config import Settings
from civic_chat.core.exceptions import LLMError
from civic_chat.llm.client import LLMClient

CONTENTS = [
    {"role": "user", "parts": [{"text": "Instruções"}]},
    {"role": "model", "parts": [{"text": "Entendido"}]},
    {"role": "user", "parts": [{"text": "Olá"}]},
]


def gemini_response(text):
    part = MagicMock()
    part.text = text
    candidate = MagicMock()
    candidate.content.parts = [part]
    response = MagicMock()
    response.candidates = [candidate]
    return response


@pytest.fixture
def genai():
    with patch("civic_chat.llm.client.genai") as mocked:
        yield mocked


class TestLLMClient:

    def test_gemini_reply(self, genai):
        genai.GenerativeModel.return_value.generate_content.return_value = gemini_response("Oi!")
        client = LLMClient(Settings(gemini_api_key="k"))

        assert client.generate(CONTENTS) == "Oi!"
        genai.configure.assert_called_once_with(api_key="k")
        genai.GenerativeModel.assert_called_once_with(model_name="gemini-2.0-flash")

    def test_no_candidates_gives_empty_text(self, genai):
        response = MagicMock()
        response.candidates = []
        genai.GenerativeModel.return_value.generate_content.return_value = response

        assert LLMClient(Settings(gemini_api_key="k")).generate(CONTENTS) == ""

    def test_failure_without_fallback_raises(self, genai):
        genai.GenerativeModel.return_value.generate_content.side_effect = RuntimeError("429 quota")

        with pytest.raises(LLMError):
            LLMClient(Settings(gemini_api_key="k")).generate(CONTENTS)

    def test_groq_fallback(self, genai):
        genai.GenerativeModel.return_value.generate_content.side_effect = RuntimeError("boom")

        with patch("civic_chat.llm.client.Groq") as groq_cls, \
                patch("civic_chat.llm.client.time.sleep"):
            completion = MagicMock()
            completion.choices = [MagicMock()]
            completion.choices[0].message.content = "Resposta Groq"
            groq_cls.return_value.chat.completions.create.return_value = completion

            client = LLMClient(Settings(gemini_api_key="k", groq_api_key="g"))
            assert client.generate(CONTENTS) == "Resposta Groq"

            messages = groq_cls.return_value.chat.completions.create.call_args.kwargs["messages"]
            assert [m["role"] for m in messages] == ["user", "assistant", "user"]
            assert messages[-1]["content"] == "Olá"

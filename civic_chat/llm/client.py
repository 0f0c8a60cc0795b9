"""
LLM Client for Google Gemini, with Groq as a fallback provider.

This module provides a clean interface to the text-completion APIs.
It handles:
- API client initialization
- Request/response handling
- Error handling and logging
- Falling back to Groq when Gemini fails and a Groq key is configured

The caller passes an ordered list of Gemini-style turns:
    [{"role": "user" | "model", "parts": [{"text": "..."}]}, ...]
"""
import time
from typing import Any, Dict, List, Optional

import google.generativeai as genai
from groq import Groq

from civic_chat.core.config import Settings, get_settings
from civic_chat.core.exceptions import LLMError
from civic_chat.core.logging_config import get_logger

logger = get_logger(__name__)

Contents = List[Dict[str, Any]]


class LLMClient:
    """
    Client for generating chat replies.

    Features:
    - Gemini as the primary provider
    - Groq fallback when GROQ_API_KEY is set
    - Sampling parameters taken from Settings

    Example:
        >>> client = LLMClient()
        >>> client.generate([{"role": "user", "parts": [{"text": "Olá"}]}])
        'Olá! Como posso ajudar?'
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize clients for the configured providers."""
        self.settings = settings or get_settings()

        genai.configure(api_key=self.settings.gemini_api_key)
        self.generation_config = genai.types.GenerationConfig(
            temperature=self.settings.llm_temperature,
            top_k=self.settings.llm_top_k,
            top_p=self.settings.llm_top_p,
        )

        self.groq_client = None
        if self.settings.groq_api_key:
            self.groq_client = Groq(api_key=self.settings.groq_api_key)

        logger.info(
            f"LLM Client initialized: gemini={self.settings.gemini_model}, "
            f"groq_fallback={'on' if self.groq_client else 'off'}"
        )

    def generate(self, contents: Contents) -> str:
        """
        Generate a reply for the conversation.

        Args:
            contents: Ordered role-tagged turns, last one from the user

        Returns:
            The best candidate's text, or "" if the model produced none

        Raises:
            LLMError: If every provider failed
        """
        attempts = [("google", self.settings.gemini_model)]
        if self.groq_client is not None:
            attempts.append(("groq", self.settings.groq_model))

        last_error = None
        for i, (provider, model) in enumerate(attempts):
            try:
                if i > 0:
                    logger.info(f"Attempt {i + 1}: Falling back to {provider.title()} ({model})...")
                    time.sleep(1 * i)

                if provider == "google":
                    return self._generate_google(contents, model)
                return self._generate_groq(contents, model)

            except Exception as e:
                error_msg = str(e).lower()
                is_rate_limit = "429" in error_msg or "quota" in error_msg or "rate limit" in error_msg

                log_level = logger.warning if is_rate_limit else logger.error
                log_level(f"Provider failed ({provider}/{model}): {e}")
                last_error = e

        logger.critical("ALL LLM PROVIDERS FAILED.")
        raise LLMError(f"LLM request failed: {last_error}")

    def _generate_google(self, contents: Contents, model: str) -> str:
        """Execute request using Google Gemini."""
        model_instance = genai.GenerativeModel(model_name=model)
        response = model_instance.generate_content(
            contents,
            generation_config=self.generation_config,
        )

        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return ""
        parts = getattr(candidates[0].content, "parts", None) or []
        if not parts:
            return ""
        return parts[0].text or ""

    def _generate_groq(self, contents: Contents, model: str) -> str:
        """Execute request using Groq (OpenAI-style messages)."""
        messages = [
            {
                "role": "assistant" if turn.get("role") == "model" else "user",
                "content": "".join(part.get("text", "") for part in turn.get("parts", [])),
            }
            for turn in contents
        ]

        response = self.groq_client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=self.settings.llm_temperature,
            top_p=self.settings.llm_top_p,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

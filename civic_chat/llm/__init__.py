"""
LLM module - Language model integration.

This module handles all LLM interactions:
- Prompt construction
- API calls to Gemini (Groq as fallback)
- Error handling for LLM failures
"""
from civic_chat.core.exceptions import LLMError
from civic_chat.llm.client import LLMClient

__all__ = [
    "LLMClient",
    "LLMError",
]

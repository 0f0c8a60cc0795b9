"""
Prompts module - LLM prompt templates.

Prompts are stored as separate Python files for:
- Version control of prompt changes
- Clear documentation of prompt purpose
"""
from civic_chat.llm.prompts.chat_prompts import (
    FALLBACK_REPLY,
    MODEL_ACKNOWLEDGEMENT,
    get_chat_system_prompt,
)

__all__ = [
    "FALLBACK_REPLY",
    "MODEL_ACKNOWLEDGEMENT",
    "get_chat_system_prompt",
]

"""
Chat Service - Business logic for conversational interactions.

This service orchestrates the chat flow:
1. Checks the response cache for the same message and context
2. Decides whether live public data is needed
3. Fetches and renders that data into the user's message
4. Calls the LLM with system instructions and conversation context
5. Caches replies that did not use live data

The cache, aggregator and LLM client are passed in by the caller; the
service holds no global state.
"""
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from civic_chat.cache import TTLCache, build_fingerprint
from civic_chat.core.clock import format_display_time, local_now
from civic_chat.core.logging_config import get_logger, truncate
from civic_chat.llm.client import LLMClient
from civic_chat.llm.prompts import (
    FALLBACK_REPLY,
    MODEL_ACKNOWLEDGEMENT,
    get_chat_system_prompt,
)
from civic_chat.models.chat import ChatContext, ChatRequest, ChatResponse
from civic_chat.realtime import RealTimeAggregator, render_bundle_context

logger = get_logger(__name__)

MODEL_ROLES = {"model", "assistant", "bot"}


def _turn(role: str, text: str) -> Dict[str, Any]:
    return {"role": role, "parts": [{"text": text}]}


class ChatService:
    """
    Service for answering chat messages.

    Example:
        >>> service = ChatService(LLMClient(), TTLCache(300), RealTimeAggregator())
        >>> response = service.process_message(ChatRequest(message="O que é o PIB?"))
        >>> response.cached
        False
        >>> service.process_message(ChatRequest(message="O que é o PIB?")).cached
        True
    """

    def __init__(
        self,
        llm_client: LLMClient,
        cache: TTLCache,
        aggregator: RealTimeAggregator,
        clock: Callable[[], datetime] = local_now
    ):
        self.llm_client = llm_client
        self.cache = cache
        self.aggregator = aggregator
        self._clock = clock
        logger.info("ChatService initialized")

    def process_message(self, request: ChatRequest) -> ChatResponse:
        """
        Answer one chat message.

        Args:
            request: Message plus previous conversation turns

        Returns:
            ChatResponse; `cached` is True when served from the cache

        Raises:
            LLMError: If the LLM could not produce a reply
        """
        fingerprint = build_fingerprint(
            request.message,
            [turn.model_dump() for turn in request.context],
        )

        cached, found = self.cache.get(fingerprint)
        if found:
            logger.info(f"Serving cached reply for: {truncate(request.message)}")
            return cached.model_copy(update={"cached": True})

        needs_real_time = self.aggregator.needs_augmentation(request.message)
        now = self._clock()

        enhanced_message = request.message
        if needs_real_time:
            logger.info(f"[REALTIME] Fetching live data for: {truncate(request.message)}")
            bundle = self.aggregator.fetch(request.message)
            enhanced_message = request.message + render_bundle_context(bundle)

        contents = self.build_contents(enhanced_message, request.context, now)

        reply = self.llm_client.generate(contents) or FALLBACK_REPLY

        response = ChatResponse(
            reply=reply,
            timestamp=format_display_time(now),
            real_time=needs_real_time,
        )

        if not needs_real_time:
            self.cache.set(fingerprint, response)

        logger.info(f"Question: {truncate(request.message, 100)}")
        logger.info(f"Answer: {truncate(reply, 100)}")

        return response

    def build_contents(
        self,
        message: str,
        context: List[ChatContext],
        now: Optional[datetime] = None
    ) -> List[Dict[str, Any]]:
        """
        Assemble the LLM turns.

        Order: system instructions, model acknowledgement, the client's
        context turns as sent, then the (possibly enhanced) message.
        """
        now = now or self._clock()
        contents = [
            _turn("user", f"INSTRUÇÕES DO SISTEMA:\n{get_chat_system_prompt(now)}"),
            _turn("model", MODEL_ACKNOWLEDGEMENT),
        ]

        for turn in context:
            role = "model" if turn.role.lower() in MODEL_ROLES else "user"
            contents.append(_turn(role, turn.resolved_text()))

        contents.append(_turn("user", message))
        return contents

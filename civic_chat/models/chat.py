"""
Request and Response models for the Chat API.

These Pydantic models define the contract between client and server.
They provide:
- Type validation
- Automatic documentation
- Request/response serialization
"""
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatContext(BaseModel):
    """
    One previous turn of the conversation.

    Older clients send the turn text as `text` instead of `content`;
    both are accepted.
    """
    role: str = Field(default="", description="'user' or 'model'")
    content: str = Field(default="", description="Turn text")
    text: str = Field(default="", description="Alternative field for the turn text")

    def resolved_text(self) -> str:
        """Turn text, preferring `content` over `text`."""
        return self.content or self.text


class ChatRequest(BaseModel):
    """
    Request model for the /api/chat endpoint.

    Attributes:
        message: The user's question or statement.
        context: Earlier turns of the conversation, oldest first.
    """
    message: str = Field(
        default="",
        description="The user's message or question",
        examples=["Quais projetos de lei estão em tramitação na Câmara?"]
    )
    context: List[ChatContext] = Field(
        default_factory=list,
        description="Previous conversation turns in order"
    )


class ChatResponse(BaseModel):
    """Response model for the /api/chat endpoint."""
    model_config = ConfigDict(populate_by_name=True)

    reply: str = Field(..., description="The assistant's response")
    timestamp: str = Field(..., description="Human readable response time")
    real_time: bool = Field(
        default=False,
        alias="realTime",
        description="True when live public data was requested for this reply"
    )
    cached: bool = Field(
        default=False,
        description="True when the reply was served from the response cache"
    )


class CacheInfo(BaseModel):
    size: int
    max_age: float = Field(..., alias="maxAge", description="Cache TTL in seconds")

    model_config = ConfigDict(populate_by_name=True)


class HealthResponse(BaseModel):
    """Response model for the /api/health endpoint."""
    status: str = Field(default="ok")
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    cache: CacheInfo


class CacheClearResponse(BaseModel):
    """Response model for POST /api/cache/clear."""
    model_config = ConfigDict(populate_by_name=True)

    message: str
    before_size: int = Field(..., alias="beforeSize")
    after_size: int = Field(..., alias="afterSize")
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class Source(BaseModel):
    nome: str
    url: str
    descricao: Optional[str] = None


class SourcesResponse(BaseModel):
    """Response model for GET /api/sources."""
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    sources: Dict[str, List[Source]]


class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str
    message: str
    details: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)

"""Pydantic models for API requests and responses."""
from datetime import datetime
from typing import Literal, Tuple
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Request model for chat endpoint."""
    content: str = Field(..., description="The student's question")


class ChatResponse(BaseModel):
    """Response model for chat endpoint."""
    answer: str = Field(..., description="Answer text to show as a chat bubble")
    source: Literal["gemini", "fallback"] = Field(
        "gemini", description="Whether the answer came from Gemini or the canned answers"
    )


class VisionRequest(BaseModel):
    """Request model for the image text extraction endpoint."""
    image: str = Field("", description="Base64-encoded image data (no data: URL prefix)")
    mime_type: str = Field("image/jpeg", description="MIME type of the encoded image")


class VisionResponse(BaseModel):
    """Response model for the image text extraction endpoint."""
    text: str = Field(..., description="Text extracted from the image")


class ChatMessage(BaseModel):
    """One bubble in the chat transcript."""
    id: str = Field(default_factory=lambda: str(uuid4()))
    content: str
    sender: Literal["user", "bot"]
    timestamp: datetime = Field(default_factory=datetime.now)


class KnowledgeEntry(BaseModel):
    """Canned question/answer pair used when Gemini is unavailable."""
    model_config = ConfigDict(frozen=True)

    question: str
    answer: str
    keywords: Tuple[str, ...]

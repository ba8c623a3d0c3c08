from pydantic import BaseModel
from typing import Optional


class GenerateRequest(BaseModel):
    prompt: str


class GenerateResponse(BaseModel):
    code: str


class StreamChunk(BaseModel):
    """One NDJSON line of the streaming endpoint"""
    code: str
    partial: bool = False


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
    raw: Optional[str] = None
    candidate: Optional[str] = None

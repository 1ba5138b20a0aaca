from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field


class Row(BaseModel):
    code: str
    p75: str


class UploadResponse(BaseModel):
    file_name: str
    rows: int
    loaded: bool = True


class SearchRequest(BaseModel):
    query: str = ""


class SearchResponse(BaseModel):
    query: str
    results: List[Row] = Field(default_factory=list)
    pinned: Optional[Row] = None


class SelectRequest(BaseModel):
    code: str


class TokenRequest(BaseModel):
    token: str


class KeyRequest(BaseModel):
    key: str
    text: str = ""


class SelectionResponse(BaseModel):
    text: str = ""
    selections: List[Row] = Field(default_factory=list)
    error: Optional[str] = None


class SessionResponse(BaseModel):
    mode: str
    file_name: Optional[str] = None
    loaded: bool = False
    rows: int = 0
    error: Optional[str] = None
    query: str = ""
    results: List[Row] = Field(default_factory=list)
    pinned: Optional[Row] = None
    selections: List[Row] = Field(default_factory=list)
    token_error: Optional[str] = None


class TimeData(BaseModel):
    currentTime: str = Field(examples=["2024-01-01T12:00:00.000Z"])
    timestamp: int = Field(examples=[1704110400000])
    timezone: str = Field(examples=["Europe/London"])


class TimeResponse(BaseModel):
    success: bool = True
    data: TimeData


class TimeErrorResponse(BaseModel):
    success: bool = False
    error: str


class HealthResponse(BaseModel):
    ok: bool = True

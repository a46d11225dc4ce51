"""Query Schemas — request/response bodies for the record and clean endpoints.

Invariants:
    - QueryWrite.query defaults to ""; missing or null query writes an empty query
    - CleanRequest.text is capped at 100k chars
"""

from typing import Literal

from pydantic import BaseModel, Field


class QueryWrite(BaseModel):
    """POST body for the record endpoint; a null query is stored as ""."""
    query: str | None = ""


class QueryRead(BaseModel):
    query: str


class WriteAck(BaseModel):
    ok: Literal[True] = True


class CleanRequest(BaseModel):
    """Text to clean and forward; token is passed through to the sheet endpoint."""
    text: str = Field(max_length=100_000)
    token: str | None = Field(None, max_length=500)


class CleanResponse(BaseModel):
    cleaned: str
    forwarded: bool

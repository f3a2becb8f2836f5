"""Pydantic schemas used by the API.

Request bodies are deliberately not modelled here: create/update
payloads go to the database as-is and the store is the only validator.
These schemas describe the normalized list query and the response
envelopes, and feed the generated OpenAPI document.
"""

from pydantic import BaseModel
from typing import Any, Dict, List, Literal, Optional


class ListQuery(BaseModel):
    """Normalized pagination, sort and populate parameters for a list call."""
    page: int = 1
    limit: int = 10
    offset: int = 0
    sort_direction: Literal['ASC', 'DESC'] = 'DESC'
    populate: Optional[str] = None


class PageEnvelope(BaseModel):
    """Paginated list response."""
    total: int
    page: int
    totalPages: int
    data: List[Dict[str, Any]]


class MessageOut(BaseModel):
    """Fixed-text response (`Not found` / `Deleted`)."""
    message: str


class ErrorOut(BaseModel):
    """Store failure passed through to the client."""
    error: str

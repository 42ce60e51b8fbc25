from typing import Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body returned by the scrape endpoints on 404 and 500."""

    error: str
    details: Optional[str] = None

from typing import Optional

from pydantic import BaseModel


class ScrapeRequest(BaseModel):
    url: Optional[str] = None


class ScrapeResponse(BaseModel):
    title: str
    description: str
    screenshot: str


class ScrapeFailure(BaseModel):
    error: str
    details: str

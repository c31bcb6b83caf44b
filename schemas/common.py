"""
Response envelopes shared by several routers.
"""
from typing import Optional
from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
     """Plain acknowledgement."""
     message: str


class UrlResponse(BaseModel):
     """Location of a stored upload."""
     url: str = Field(..., description="Public URL of the stored file")
     message: Optional[str] = None

# /examcell/models/common_model.py

from pydantic import BaseModel, Field
from typing import Optional


class RecordId(BaseModel):
    """Body of a DELETE request. The id is optional so the router can answer 400 itself."""
    id: Optional[int] = Field(default=None, description="The id of the record to delete.")


class Message(BaseModel):
    message: str

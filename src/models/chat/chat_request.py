from enum import Enum

from pydantic import BaseModel, Field


class ChatMode(str, Enum):
    QUERY = "query"
    LOCATION = "location"


class ChatQueryRequest(BaseModel):
    query: str = Field(..., description="Natural language weather query or a location name")
    mode: ChatMode = Field(
        default=ChatMode.QUERY,
        description="'query' to interpret free text, 'location' to look the text up as a place name",
    )

"""Core data models."""

from datetime import datetime
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# Bot API wire models (getUpdates)

class Chat(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int


class User(BaseModel):
    model_config = ConfigDict(extra="ignore")

    username: str = ""


class IncomingMessage(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    text: str = ""
    from_: Optional[User] = Field(None, alias="from")
    chat: Optional[Chat] = None


class Update(BaseModel):
    model_config = ConfigDict(extra="ignore")

    update_id: int
    message: Optional[IncomingMessage] = None


class UpdatesResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ok: bool
    result: List[Update] = Field(default_factory=list)
    description: Optional[str] = None


# Events produced by the cursor consumer

class EventType(str, Enum):
    """Kind of bot event."""
    UNKNOWN = "unknown"
    MESSAGE = "message"


class MessageMeta(BaseModel):
    """Where a message came from. Needed to answer it."""
    chat_id: int
    username: str = ""


class MessageEvent(BaseModel):
    type: Literal[EventType.MESSAGE] = EventType.MESSAGE
    text: str = ""
    meta: Optional[MessageMeta] = None


class UnknownEvent(BaseModel):
    type: Literal[EventType.UNKNOWN] = EventType.UNKNOWN
    text: str = ""


Event = Annotated[Union[MessageEvent, UnknownEvent], Field(discriminator="type")]


# Items produced by the channel (window) consumer

class Candidate(BaseModel):
    """A post scraped from a channel page, before filtering."""
    id: str
    text: str
    timestamp: Optional[datetime] = None


class Message(BaseModel):
    """A post accepted for forwarding."""
    id: str = Field(..., description="Post identifier, e.g. 'channel/123'")
    text: str = Field(..., description="Cleaned text sent downstream")


class ConsumerStatus(BaseModel):
    """Runtime snapshot of one poll consumer."""
    name: str
    kind: str
    running: bool = False
    fetches: int = 0
    fetch_errors: int = 0
    processed: int = 0
    process_errors: int = 0
    crashes: int = 0
    last_error: Optional[str] = None
    last_fetch_at: Optional[datetime] = None

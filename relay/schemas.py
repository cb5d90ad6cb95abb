"""Wire shapes for the webhook, the AI responder and the Send API."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


PAGE_OBJECT = "page"


class Sender(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Page-scoped id of the user")


class Message(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: Optional[str] = None


class MessagingEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    sender: Sender
    message: Optional[Message] = None

    @property
    def text(self) -> Optional[str]:
        if self.message is None:
            return None
        return self.message.text or None


class Entry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    messaging: List[MessagingEvent] = Field(default_factory=list)

    def first_event(self) -> Optional[MessagingEvent]:
        return self.messaging[0] if self.messaging else None


class WebhookEnvelope(BaseModel):
    """Just enough of a webhook to route it; entries stay raw until the object is known."""

    model_config = ConfigDict(extra="ignore")

    object: str
    entry: List[Any] = Field(default_factory=list)


class WebhookPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    object: str
    entry: List[Entry] = Field(default_factory=list)


class ResponderRequest(BaseModel):
    message: str
    history: List[Any] = Field(default_factory=list)


class ResponderReply(BaseModel):
    response: str
    history: List[Any] = Field(default_factory=list)


class SendRequest(BaseModel):
    recipient: Sender
    message: Message
    messaging_type: str = "RESPONSE"

from __future__ import annotations

import logging
from typing import Optional

import httpx

from config.settings import Settings
from relay.schemas import Message, SendRequest, Sender


logger = logging.getLogger("messenger_relay.messenger")


class SendError(RuntimeError):
    """A reply could not be delivered through the Send API."""


class MessengerClient:
    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self._transport = transport

    async def send_text(self, recipient_id: str, text: str) -> None:
        token = self.settings.page_access_token
        if not token:
            raise SendError("PAGE_ACCESS_TOKEN not configured")

        body = SendRequest(recipient=Sender(id=recipient_id), message=Message(text=text))

        try:
            async with httpx.AsyncClient(
                timeout=self.settings.http_timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self.settings.send_api_url,
                    params={"access_token": token},
                    json=body.model_dump(),
                )
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise SendError(f"Send API call failed: {exc}") from exc

        logger.info("Reply sent: recipient=%s chars=%s", recipient_id, len(text))

from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from config.settings import Settings
from relay.schemas import ResponderReply, ResponderRequest


logger = logging.getLogger("messenger_relay.responder")


class ResponderError(RuntimeError):
    """The AI backend could not produce a usable reply."""


class AIResponderClient:
    """Thin client for the external AI backend.

    The backend receives ``{message, history}`` and answers with
    ``{response, history}`` where ``history`` already includes the new turn.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self._transport = transport

    async def ask(self, message: str, history: List[Any]) -> ResponderReply:
        endpoint = self.settings.ai_api_url
        if not endpoint:
            raise ResponderError("PYTHON_API_URL not configured")

        payload = ResponderRequest(message=message, history=history)
        logger.info(
            "Sending to AI responder: message_len=%s history_turns=%s",
            len(message),
            len(history),
        )

        try:
            async with httpx.AsyncClient(
                timeout=self.settings.http_timeout, transport=self._transport
            ) as client:
                response = await client.post(endpoint, json=payload.model_dump())
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            raise ResponderError(f"AI responder call failed: {exc}") from exc
        except ValueError as exc:
            raise ResponderError(f"AI responder returned invalid JSON: {exc}") from exc

        try:
            return ResponderReply.model_validate(data)
        except ValidationError as exc:
            raise ResponderError(f"AI responder returned an unexpected shape: {exc}") from exc

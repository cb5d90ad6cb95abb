from __future__ import annotations

import hmac
from typing import Dict, Optional

from fastapi import Depends, FastAPI, Query
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
import logging
from pydantic import ValidationError

from config.settings import Settings, get_settings
from relay.clients import AIResponderClient, MessengerClient
from relay.core.memory import HistoryStore, InMemoryHistoryStore
from relay.relay import process_payload
from relay.schemas import PAGE_OBJECT, WebhookEnvelope, WebhookPayload


settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="[%(asctime)s] %(levelname)s - %(message)s",
)
logger = logging.getLogger("messenger_relay")

app = FastAPI(title="Messenger AI Relay", version="1.0.0")

# Process-lifetime only; lost on restart or cold start.
_history_store = InMemoryHistoryStore()


def get_history_store() -> HistoryStore:
    return _history_store


def get_responder(settings: Settings = Depends(get_settings)) -> AIResponderClient:
    return AIResponderClient(settings)


def get_messenger(settings: Settings = Depends(get_settings)) -> MessengerClient:
    return MessengerClient(settings)


@app.get("/webhook")
def verify_webhook(
    mode: Optional[str] = Query(None, alias="hub.mode"),
    token: Optional[str] = Query(None, alias="hub.verify_token"),
    challenge: Optional[str] = Query(None, alias="hub.challenge"),
    settings: Settings = Depends(get_settings),
) -> PlainTextResponse:
    expected = settings.verify_token
    token_ok = bool(expected) and hmac.compare_digest(
        (token or "").encode(), expected.encode()
    )
    if mode == "subscribe" and token_ok:
        logger.info("WEBHOOK_VERIFIED")
        return PlainTextResponse(challenge or "", status_code=200)

    logger.warning("Verification failed: mode=%s token_match=%s", mode, token_ok)
    return PlainTextResponse("Forbidden", status_code=403)


@app.post("/webhook")
async def receive_webhook(
    envelope: WebhookEnvelope,
    settings: Settings = Depends(get_settings),
    store: HistoryStore = Depends(get_history_store),
    responder: AIResponderClient = Depends(get_responder),
    messenger: MessengerClient = Depends(get_messenger),
) -> PlainTextResponse:
    if envelope.object != PAGE_OBJECT:
        logger.warning("Ignoring webhook for object=%s", envelope.object)
        return PlainTextResponse("Not Found", status_code=404)

    try:
        payload = WebhookPayload.model_validate(envelope.model_dump())
    except ValidationError as exc:
        errors = [
            {**err, "loc": ("body", *err["loc"])}
            for err in exc.errors(include_url=False)
        ]
        raise RequestValidationError(errors) from exc

    relayed = await process_payload(
        payload,
        store=store,
        responder=responder,
        messenger=messenger,
        fallback_text=settings.fallback_text,
    )
    logger.info("Webhook processed: entries=%s relayed=%s", len(payload.entry), relayed)
    return PlainTextResponse("EVENT_RECEIVED", status_code=200)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}

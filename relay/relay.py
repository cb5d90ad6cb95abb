from __future__ import annotations

import logging
from typing import Any, List, Protocol

from relay.core.memory import HistoryStore
from relay.schemas import ResponderReply, WebhookPayload


logger = logging.getLogger("messenger_relay.relay")


class Responder(Protocol):
    async def ask(self, message: str, history: List[Any]) -> ResponderReply:
        ...


class Messenger(Protocol):
    async def send_text(self, recipient_id: str, text: str) -> None:
        ...


async def relay_message(
    sender_id: str,
    text: str,
    *,
    store: HistoryStore,
    responder: Responder,
    messenger: Messenger,
    fallback_text: str,
) -> None:
    """Forward one user message to the AI backend and deliver its answer.

    Stored history is replaced only after the answer was delivered. When the
    responder or the reply delivery fails the user gets ``fallback_text`` and
    history stays as it was. A failure to send the fallback propagates.
    """
    history = store.get(sender_id)

    try:
        reply = await responder.ask(text, history)
        await messenger.send_text(sender_id, reply.response)
    except Exception as exc:
        logger.exception("Error relaying AI response for sender=%s: %s", sender_id, exc)
        await messenger.send_text(sender_id, fallback_text)
        return

    store.put(sender_id, reply.history)
    logger.info(
        "Relayed reply: sender=%s history_turns=%s", sender_id, len(reply.history)
    )


async def process_payload(
    payload: WebhookPayload,
    *,
    store: HistoryStore,
    responder: Responder,
    messenger: Messenger,
    fallback_text: str,
) -> int:
    """Relay the first messaging event of every entry that carries text.

    Returns how many messages were relayed.
    """
    relayed = 0
    for entry in payload.entry:
        event = entry.first_event()
        if event is None:
            continue
        text = event.text
        if not text:
            # Delivery receipts, reactions, attachments-only messages
            continue

        logger.info("Message from %s: chars=%s", event.sender.id, len(text))
        await relay_message(
            event.sender.id,
            text,
            store=store,
            responder=responder,
            messenger=messenger,
            fallback_text=fallback_text,
        )
        relayed += 1
    return relayed

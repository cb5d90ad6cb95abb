from __future__ import annotations

import asyncio

import pytest

from relay.core.memory import InMemoryHistoryStore
from relay.relay import process_payload, relay_message
from relay.schemas import WebhookPayload
from tests.fakes import FakeMessenger, FakeResponder, page_event, text_event


def _relay(store, responder, messenger, sender="u1", text="hi"):
    asyncio.run(
        relay_message(
            sender,
            text,
            store=store,
            responder=responder,
            messenger=messenger,
            fallback_text="fallback",
        )
    )


def test_memory_module_is_documented():
    from relay.core import memory

    assert memory.__doc__.startswith("Per-sender conversation history.")


def test_store_returns_copies():
    store = InMemoryHistoryStore()
    assert store.get("nobody") == []

    store.put("u1", ["a"])
    got = store.get("u1")
    got.append("b")
    assert store.get("u1") == ["a"]

    store.clear()
    assert len(store) == 0


def test_relay_success_replaces_history():
    store, responder, messenger = InMemoryHistoryStore(), FakeResponder(), FakeMessenger()
    store.put("u1", ["old"])

    _relay(store, responder, messenger)

    assert responder.calls == [("hi", ["old"])]
    assert messenger.sent == [("u1", "echo: hi")]
    assert store.get("u1") == [
        "old",
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "echo: hi"},
    ]


def test_relay_failure_sends_fallback_once():
    store, messenger = InMemoryHistoryStore(), FakeMessenger()
    store.put("u1", ["old"])

    _relay(store, FakeResponder(fail=True), messenger)

    assert messenger.sent == [("u1", "fallback")]
    assert store.get("u1") == ["old"]


def test_relay_reply_send_failure_sends_fallback():
    store, messenger = InMemoryHistoryStore(), FakeMessenger(error=RuntimeError("graph"), fail_times=1)
    store.put("u1", ["old"])

    _relay(store, FakeResponder(), messenger)

    assert messenger.sent == [("u1", "echo: hi"), ("u1", "fallback")]
    assert store.get("u1") == ["old"]


def test_relay_fallback_send_failure_propagates():
    store, messenger = InMemoryHistoryStore(), FakeMessenger(error=RuntimeError("graph"))

    with pytest.raises(RuntimeError, match="graph"):
        _relay(store, FakeResponder(fail=True), messenger)

    assert messenger.sent == [("u1", "fallback")]
    assert store.get("u1") == []


def test_process_payload_uses_first_event_of_each_entry():
    payload = WebhookPayload.model_validate(
        {
            "object": "page",
            "entry": [
                {"messaging": [text_event("u1", "first"), text_event("u1", "ignored")]},
                {"messaging": [text_event("u2", None)]},
                {"messaging": []},
            ],
        }
    )
    store, responder, messenger = InMemoryHistoryStore(), FakeResponder(), FakeMessenger()

    relayed = asyncio.run(
        process_payload(
            payload,
            store=store,
            responder=responder,
            messenger=messenger,
            fallback_text="fallback",
        )
    )

    assert relayed == 1
    assert [call[0] for call in responder.calls] == ["first"]
    assert messenger.sent == [("u1", "echo: first")]


def test_empty_text_counts_as_missing():
    payload = WebhookPayload.model_validate(page_event(text_event("u1", "")))
    assert payload.entry[0].first_event().text is None

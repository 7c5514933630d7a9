import json

import pytest

from src.models.webhook import WebhookEvent, order_id_from_reference
from src.utils.factories import WebhookFactory


class TestWebhookFactory:
    """Tests for WebhookFactory."""

    @pytest.mark.unit
    @pytest.mark.parametrize("event_type", ["checkout.paid", "checkout.failed"])
    def test_create_event_for_checkout_event_types(self, event_type):
        event = WebhookFactory.create_event(event_type)
        assert isinstance(event, WebhookEvent)
        assert event.event_type == event_type
        assert event.payload["event_type"] == event_type
        assert event.event_id.startswith("evt_")
        assert event.payload["checkout_reference"] == event.checkout_reference
        assert order_id_from_reference(event.checkout_reference) == 123

    @pytest.mark.unit
    def test_create_event_custom_overrides(self):
        event = WebhookFactory.create_event(
            "checkout.paid",
            order_id=42,
            amount=9.5,
            currency="GBP",
        )
        assert order_id_from_reference(event.checkout_reference) == 42
        assert event.payload["amount"] == 9.5
        assert event.payload["currency"] == "GBP"

    @pytest.mark.unit
    def test_create_event_payload_overrides(self):
        event = WebhookFactory.create_event("checkout.paid", payload={"checkout_reference": "bogus"})
        assert event.payload["checkout_reference"] == "bogus"

    @pytest.mark.unit
    def test_create_event_generates_unique_event_ids(self):
        e1 = WebhookFactory.create_event("checkout.paid")
        e2 = WebhookFactory.create_event("checkout.paid")
        assert e1.event_id != e2.event_id

    @pytest.mark.unit
    def test_to_body_is_compact_json_in_field_order(self):
        event = WebhookFactory.create_event("checkout.paid")
        body = WebhookFactory.to_body(event)
        assert isinstance(body, bytes)
        assert b", " not in body
        assert list(json.loads(body)) == list(event.payload)

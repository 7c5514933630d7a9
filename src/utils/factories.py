import time
import uuid
from datetime import datetime, timezone

from src.models.webhook import WebhookEvent
from src.verification.crypto import canonicalize


class WebhookFactory:
    """Factory for creating SumUp checkout WebhookEvent instances with sensible defaults."""

    @staticmethod
    def create_event(event_type: str = "checkout.paid", **overrides) -> WebhookEvent:
        order_id = overrides.pop("order_id", 123)
        checkout_reference = overrides.pop(
            "checkout_reference", f"ORDER-{order_id}-{int(time.time() * 1000)}"
        )
        now = datetime.now(timezone.utc)

        payload = WebhookFactory._build_payload(event_type, checkout_reference, now, **overrides)
        payload_overrides = overrides.pop("payload", None)
        if payload_overrides:
            payload.update(payload_overrides)

        defaults = {
            "event_id": f"evt_{uuid.uuid4().hex[:16]}",
            "checkout_reference": checkout_reference,
            "event_type": event_type,
            "timestamp": now,
            "payload": payload,
            "signature": "",
        }
        # Allow overriding top-level event fields
        for key in list(overrides):
            if key in defaults:
                defaults[key] = overrides.pop(key)

        return WebhookEvent(**defaults)

    @staticmethod
    def _build_payload(event_type: str, checkout_reference: str, timestamp: datetime, **kwargs) -> dict:
        return {
            "event_type": event_type,
            "id": kwargs.get("checkout_id", uuid.uuid4().hex),
            "checkout_reference": checkout_reference,
            "status": _event_type_to_status(event_type),
            "amount": kwargs.get("amount", 21.98),
            "currency": kwargs.get("currency", "EUR"),
            "timestamp": timestamp.isoformat(),
        }

    @staticmethod
    def to_body(event: WebhookEvent) -> bytes:
        """Serialize an event payload exactly as the provider puts it on the wire."""
        return canonicalize(event.payload)


def _event_type_to_status(event_type: str) -> str:
    mapping = {
        "checkout.paid": "PAID",
        "checkout.failed": "FAILED",
    }
    return mapping.get(event_type, "PENDING")

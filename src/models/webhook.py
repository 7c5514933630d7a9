import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

CHECKOUT_REFERENCE_PATTERN = re.compile(r"^ORDER-(\d+)(?:-\d+)?$")


class OrderStatus(Enum):
    PAID = "PAID"
    PAYMENT_FAILED = "PAYMENT_FAILED"
    UNKNOWN = "UNKNOWN"


EVENT_TYPE_TO_ORDER_STATUS = {
    "checkout.paid": OrderStatus.PAID,
    "checkout.failed": OrderStatus.PAYMENT_FAILED,
}


@dataclass
class WebhookEvent:
    event_id: str
    checkout_reference: str  # "ORDER-<order id>-<unix millis>"
    event_type: str  # "checkout.paid", "checkout.failed"
    timestamp: datetime
    payload: dict
    signature: str = ""


def order_id_from_reference(checkout_reference) -> int | None:
    """Extract the order id from a checkout reference, or None if malformed."""
    if not isinstance(checkout_reference, str):
        return None
    match = CHECKOUT_REFERENCE_PATTERN.match(checkout_reference)
    if match is None:
        return None
    return int(match.group(1))


def order_status_for(event_type) -> OrderStatus:
    return EVENT_TYPE_TO_ORDER_STATUS.get(event_type, OrderStatus.UNKNOWN)

from .verification import VerificationFailure, VerificationResult
from .webhook import OrderStatus, WebhookEvent, order_id_from_reference, order_status_for

__all__ = [
    "VerificationFailure", "VerificationResult",
    "OrderStatus", "WebhookEvent",
    "order_id_from_reference", "order_status_for",
]

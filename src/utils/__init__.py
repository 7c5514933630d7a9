from .factories import WebhookFactory

__all__ = ["WebhookFactory"]

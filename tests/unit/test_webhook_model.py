import pytest

from src.models.webhook import OrderStatus, order_id_from_reference, order_status_for


class TestCheckoutReference:
    """Tests for order id extraction from checkout references."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "reference, order_id",
        [
            ("ORDER-123", 123),
            ("ORDER-123-1700000000000", 123),
            ("ORDER-7-1", 7),
        ],
    )
    def test_valid_references(self, reference, order_id):
        assert order_id_from_reference(reference) == order_id

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "reference",
        ["", "ORD-123456", "ORDER-", "ORDER-abc", "ORDER-1-2-3", "order-1", None, 123],
    )
    def test_invalid_references(self, reference):
        assert order_id_from_reference(reference) is None


class TestOrderStatus:
    """Tests for event type to order status mapping."""

    @pytest.mark.unit
    def test_known_event_types(self):
        assert order_status_for("checkout.paid") == OrderStatus.PAID
        assert order_status_for("checkout.failed") == OrderStatus.PAYMENT_FAILED

    @pytest.mark.unit
    def test_unknown_event_type(self):
        assert order_status_for("checkout.refunded") == OrderStatus.UNKNOWN
        assert order_status_for(None) == OrderStatus.UNKNOWN

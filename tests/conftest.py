import pytest

from src.merchant_receiver.server import MerchantWebhookServer
from src.observability.metrics import VerificationMetrics
from src.utils.factories import WebhookFactory
from src.verification.signer import WebhookSigner
from src.verification.verifier import SignatureVerifier


WEBHOOK_SECRET = "test-secret-key-for-hmac"


@pytest.fixture
def webhook_secret():
    return WEBHOOK_SECRET


@pytest.fixture
def signer():
    return WebhookSigner(WEBHOOK_SECRET)


@pytest.fixture
def metrics():
    return VerificationMetrics(window_seconds=300)


@pytest.fixture
def verifier(metrics):
    return SignatureVerifier(metrics=metrics)


@pytest.fixture
def merchant_server(verifier):
    server = MerchantWebhookServer(secret=WEBHOOK_SECRET, verifier=verifier)
    server.start()
    yield server
    server.stop()


@pytest.fixture
def merchant_server_no_secret(monkeypatch):
    """Merchant server whose environment holds no webhook secret."""
    monkeypatch.delenv("SUMUP_WEBHOOK_SECRET", raising=False)
    server = MerchantWebhookServer()
    server.start()
    yield server
    server.stop()


@pytest.fixture
def webhook_factory():
    return WebhookFactory

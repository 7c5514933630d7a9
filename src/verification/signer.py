from src.verification.crypto import generate_signature
from src.verification.verifier import SignatureVerifier


class WebhookSigner:
    """Signs and verifies webhook payloads using HMAC-SHA256."""

    def __init__(self, secret, encoding: str = "hex"):
        self.secret = secret
        self.encoding = encoding
        self._verifier = SignatureVerifier(encoding=encoding)

    def sign(self, payload) -> str:
        return generate_signature(payload, self.secret, self.encoding)

    def verify(self, payload, signature: str) -> bool:
        return self._verifier.verify(signature, payload, self.secret)

import hmac
import logging

from src.models.verification import VerificationResult
from src.observability.metrics import VerificationMetrics
from src.verification.crypto import (
    SUPPORTED_ENCODINGS,
    decode_signature,
    hmac_digest,
    secret_to_bytes,
)
from src.verification.errors import (
    MissingSecret,
    SignatureMismatch,
    SignatureVerificationError,
)

logger = logging.getLogger(__name__)


class SignatureVerifier:
    """Decides whether a webhook signature was produced with the shared secret.

    The verifier keeps no per-call state, so one instance can be shared by
    every request-handling thread. Attacker-controlled input (the signature
    and the payload) never raises: every failure collapses to ``False``.
    Passing ``None`` or a non-string secret is a programming error and
    raises ``TypeError``.
    """

    def __init__(self, encoding: str = "hex", metrics: VerificationMetrics | None = None):
        if encoding not in SUPPORTED_ENCODINGS:
            raise ValueError(f"unsupported signature encoding: {encoding!r}")
        self.encoding = encoding
        self.metrics = metrics

    def verify(self, signature, payload, secret) -> bool:
        return self.check(signature, payload, secret).valid

    def check(self, signature, payload, secret) -> VerificationResult:
        """Verify and return the outcome with its internal reason code."""
        key = secret_to_bytes(secret)
        try:
            self._authenticate(signature, payload, key)
        except SignatureVerificationError as e:
            logger.warning("Webhook signature rejected: reason=%s", e.reason.value)
            if self.metrics is not None:
                self.metrics.record_rejected(e.reason)
            return VerificationResult(valid=False, reason=e.reason)

        logger.debug("Webhook signature accepted")
        if self.metrics is not None:
            self.metrics.record_accepted()
        return VerificationResult(valid=True)

    def _authenticate(self, signature, payload, key: bytes) -> None:
        if not key:
            raise MissingSecret("webhook secret is empty")
        provided = decode_signature(signature, self.encoding)
        expected = hmac_digest(payload, key)
        if not hmac.compare_digest(expected, provided):
            raise SignatureMismatch("signature does not match payload")


default_verifier = SignatureVerifier()


def verify_signature(signature, payload, secret) -> bool:
    """Verify a hex HMAC-SHA256 signature against a webhook payload."""
    return default_verifier.verify(signature, payload, secret)

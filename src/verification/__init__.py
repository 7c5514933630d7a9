from .errors import (
    CanonicalizationError,
    InvalidSignatureFormat,
    MissingSecret,
    SignatureMismatch,
    SignatureVerificationError,
)
from .signer import WebhookSigner
from .verifier import SignatureVerifier, verify_signature

__all__ = [
    "SignatureVerifier", "verify_signature",
    "WebhookSigner",
    "SignatureVerificationError", "InvalidSignatureFormat",
    "MissingSecret", "CanonicalizationError", "SignatureMismatch",
]

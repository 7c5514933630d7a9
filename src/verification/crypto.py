import base64
import binascii
import hashlib
import hmac
import json

from src.verification.errors import CanonicalizationError, InvalidSignatureFormat

SUPPORTED_ENCODINGS = ("hex", "base64")


def canonicalize(payload) -> bytes:
    """Return the exact bytes a webhook payload was signed over.

    Raw bodies (bytes-like) pass through untouched and text bodies are UTF-8
    encoded. Parsed payloads are re-serialized the way the provider's signer
    does it: compact separators, insertion order kept, non-ASCII emitted as-is.
    Key order is not normalized, so a reordered payload yields different bytes.
    """
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return bytes(payload)
    try:
        if isinstance(payload, str):
            return payload.encode("utf-8")
        message = json.dumps(
            payload,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
        return message.encode("utf-8")
    except (TypeError, ValueError, RecursionError) as e:
        # UnicodeEncodeError (lone surrogates) is a ValueError
        raise CanonicalizationError(f"payload cannot be serialized: {type(e).__name__}") from e


def hmac_digest(payload, secret: bytes) -> bytes:
    return hmac.new(secret, canonicalize(payload), hashlib.sha256).digest()


def secret_to_bytes(secret) -> bytes:
    if secret is None:
        raise TypeError("secret must be str or bytes, not None")
    if isinstance(secret, str):
        return secret.encode("utf-8")
    if isinstance(secret, (bytes, bytearray)):
        return bytes(secret)
    raise TypeError(f"secret must be str or bytes, not {type(secret).__name__}")


def generate_signature(payload, secret, encoding: str = "hex") -> str:
    """Generate the HMAC-SHA256 signature for a webhook payload.

    Rendered as lowercase hex by default, or standard base64.
    """
    digest = hmac_digest(payload, secret_to_bytes(secret))
    if encoding == "hex":
        return digest.hex()
    if encoding == "base64":
        return base64.b64encode(digest).decode("ascii")
    raise ValueError(f"unsupported signature encoding: {encoding!r}")


def decode_signature(signature, encoding: str = "hex") -> bytes:
    """Decode an untrusted signature string into raw MAC bytes.

    Decoding is strict: surrounding whitespace, algorithm prefixes and
    non-alphabet characters are all rejected.
    """
    if not isinstance(signature, str) or not signature:
        raise InvalidSignatureFormat("signature must be a non-empty string")
    try:
        if encoding == "hex":
            return binascii.unhexlify(signature)
        if encoding == "base64":
            return base64.b64decode(signature, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidSignatureFormat(f"signature is not valid {encoding}") from e
    raise ValueError(f"unsupported signature encoding: {encoding!r}")

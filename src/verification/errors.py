from src.models.verification import VerificationFailure


class SignatureVerificationError(Exception):
    """Base class for every reason a webhook signature can be rejected."""

    reason: VerificationFailure = VerificationFailure.MISMATCH


class InvalidSignatureFormat(SignatureVerificationError):
    reason = VerificationFailure.INVALID_SIGNATURE_FORMAT


class MissingSecret(SignatureVerificationError):
    reason = VerificationFailure.MISSING_SECRET


class CanonicalizationError(SignatureVerificationError):
    reason = VerificationFailure.CANONICALIZATION_ERROR


class SignatureMismatch(SignatureVerificationError):
    reason = VerificationFailure.MISMATCH

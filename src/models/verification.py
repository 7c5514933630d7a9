from dataclasses import dataclass
from enum import Enum


class VerificationFailure(Enum):
    INVALID_SIGNATURE_FORMAT = "invalid_signature_format"
    MISSING_SECRET = "missing_secret"
    CANONICALIZATION_ERROR = "canonicalization_error"
    MISMATCH = "mismatch"


@dataclass(frozen=True)
class VerificationResult:
    valid: bool
    reason: VerificationFailure | None = None

    def __bool__(self) -> bool:
        return self.valid

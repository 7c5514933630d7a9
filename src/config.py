import os
import re

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv())

# SumUp webhook configuration
SIGNATURE_HEADER = os.getenv("SUMUP_SIGNATURE_HEADER", "X-Payload-Signature")
SIGNATURE_ENCODING = os.getenv("SUMUP_SIGNATURE_ENCODING", "hex")


def _account_env_name(account_id: str) -> str:
    return "SUMUP_WEBHOOK_SECRET_" + re.sub(r"[^A-Z0-9]", "_", account_id.upper())


def get_webhook_secret(account_id: str | None = None) -> bytes | None:
    """
    Resolve the shared webhook secret for a merchant account.

    An account-specific SUMUP_WEBHOOK_SECRET_<ACCOUNT> variable wins over the
    default SUMUP_WEBHOOK_SECRET. Returns None when neither is set; an empty
    value is returned as b"" so the verifier can reject it.
    """
    secret = None
    if account_id:
        secret = os.getenv(_account_env_name(account_id))
    if secret is None:
        secret = os.getenv("SUMUP_WEBHOOK_SECRET")
    if secret is None:
        return None
    return secret.encode("utf-8")

"""Validate the signature of the requests sent by the CI integration"""

import hashlib
import hmac
from typing import Optional

SIGNATURE_HEADER = "X-Hub-Signature-256"
SIGNATURE_PREFIX = "sha256="


def sign(secret: str, body: bytes) -> str:
    """Return the sha256 HMAC signature of the body, in the same format GitHub signs webhooks"""
    digest = hmac.new(secret.encode("utf-8"), msg=body, digestmod=hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def is_valid_signature(secret: Optional[str], body: bytes, signature: Optional[str]) -> bool:
    """
    Check the signature against the body.
    Without a configured secret no signature is valid.
    """
    if not secret or not signature or not signature.startswith(SIGNATURE_PREFIX):
        return False
    return hmac.compare_digest(sign(secret, body), signature)

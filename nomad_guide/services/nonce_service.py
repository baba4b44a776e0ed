"""Time-windowed anti-forgery tokens for the ajax endpoint.

A nonce is an HMAC over the action name and the current "tick". One tick is
half the configured lifetime, and a nonce from the previous tick is still
accepted, so a token stays valid for between one half and one full lifetime.
"""

import hashlib
import hmac
import logging
import math
import secrets
import time

from nomad_guide.config import settings

logger = logging.getLogger(__name__)

NONCE_ACTION = "ssm-dng-nonce"

_ephemeral_secret: str | None = None


def _secret() -> bytes:
    global _ephemeral_secret
    if settings.nonce_secret:
        return settings.nonce_secret.encode("utf-8")
    if _ephemeral_secret is None:
        logger.warning("NONCE_SECRET not configured, nonces will not survive a restart")
        _ephemeral_secret = secrets.token_hex(32)
    return _ephemeral_secret.encode("utf-8")


def _tick(now: float | None = None) -> int:
    now = time.time() if now is None else now
    return math.ceil(now / (settings.nonce_lifetime_seconds / 2))


def _digest(action: str, tick: int) -> str:
    mac = hmac.new(_secret(), f"{tick}|{action}".encode("utf-8"), hashlib.sha256)
    return mac.hexdigest()[-12:-2]


def create_nonce(action: str, now: float | None = None) -> str:
    return _digest(action, _tick(now))


def verify_nonce(nonce: str, action: str, now: float | None = None) -> bool:
    if not nonce:
        return False
    tick = _tick(now)
    for candidate in (tick, tick - 1):
        if hmac.compare_digest(nonce, _digest(action, candidate)):
            return True
    return False

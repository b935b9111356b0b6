"""
Security module for ragbot webhook verification and request signing.
Implements the Messenger subscription handshake and optional
X-Hub-Signature-256 payload validation.
"""

import hashlib
import hmac
import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request

from . import config

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Hub-Signature-256"
SIGNATURE_PREFIX = "sha256="


def fingerprint(secret: str) -> str:
    """Create a short SHA-256 fingerprint of a secret for logging (never log raw secrets)."""
    return hashlib.sha256(secret.encode()).hexdigest()[:8]


def get_client_ip(request: Request) -> str:
    """Extract real client IP from request, handling proxies and load balancers."""
    forwarded_for = request.headers.get('X-Forwarded-For')
    if forwarded_for:
        # X-Forwarded-For can contain multiple IPs, use the first one
        return forwarded_for.split(',')[0].strip()

    real_ip = request.headers.get('X-Real-IP')
    if real_ip:
        return real_ip.strip()

    return str(request.client.host) if request.client else "unknown"


def log_security_event(
    event_type: str,
    ip_address: str,
    details: Dict[str, Any],
    severity: str = "WARNING"
) -> None:
    """
    Log security events with structured data for monitoring and analysis.

    Args:
        event_type: Type of security event (verify_failure, signature_failure, etc.)
        ip_address: Source IP address
        details: Additional event details
        severity: Log severity level
    """
    log_entry = {
        "event": event_type,
        "ip": ip_address,
        "severity": severity,
        **details
    }

    if severity == "ERROR":
        logger.error(f"[SECURITY] {log_entry}")
    elif severity == "INFO":
        logger.info(f"[SECURITY] {log_entry}")
    else:
        logger.warning(f"[SECURITY] {log_entry}")


def verify_subscription(mode: Optional[str], token: Optional[str], challenge: Optional[str]) -> str:
    """
    Validate the Messenger webhook subscription handshake.

    Returns:
        The challenge to echo back

    Raises:
        HTTPException: 403 if the mode or token does not match
    """
    expected = config.VERIFY_TOKEN
    token_ok = bool(token and expected) and hmac.compare_digest(token.encode(), expected.encode())
    if mode == "subscribe" and token_ok:
        logger.info("[SECURITY] Webhook verified successfully")
        return challenge or ""

    logger.warning(
        f"[SECURITY] Webhook verification failed: mode={mode!r}, "
        f"token_hash={fingerprint(token) if token else None}"
    )
    raise HTTPException(status_code=403, detail="Verification failed")


def compute_signature(body: bytes, secret: str) -> str:
    digest = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def validate_signature(request: Request, body: bytes) -> bool:
    """
    Validate the X-Hub-Signature-256 header against the raw request body.

    Skipped (returns False) when APP_SECRET is not configured.

    Raises:
        HTTPException: 401 if the signature is missing or does not match
    """
    secret = config.APP_SECRET
    if not secret:
        return False

    client_ip = get_client_ip(request)
    provided = request.headers.get(SIGNATURE_HEADER)
    if not provided:
        log_security_event(
            "signature_missing",
            client_ip,
            {
                "reason": f"Missing {SIGNATURE_HEADER} header",
                "user_agent": request.headers.get('User-Agent', 'unknown')
            },
            severity="ERROR"
        )
        raise HTTPException(status_code=401, detail="Signature required")

    expected = compute_signature(body, secret)
    if not hmac.compare_digest(provided.encode(), expected.encode()):
        log_security_event(
            "signature_invalid",
            client_ip,
            {
                "reason": "Signature does not match payload",
                "signature_hash": fingerprint(provided),
                "user_agent": request.headers.get('User-Agent', 'unknown')
            },
            severity="ERROR"
        )
        raise HTTPException(status_code=401, detail="Invalid signature")

    return True

"""Log-safe fingerprints for user text.

Raw messages never go into application logs. Log the fingerprint and
length instead; the fingerprint lets two log lines about the same message
be correlated without exposing its content.
"""
import hashlib


def fingerprint_text(text: str) -> str:
    """Return the SHA-256 hex digest of text.

    Args:
        text: Raw message text

    Returns:
        64-char hex string safe for logging
    """
    return hashlib.sha256((text or "").encode("utf-8")).hexdigest()


def short_fingerprint(text: str, length: int = 12) -> str:
    """Truncated fingerprint for compact log lines."""
    return fingerprint_text(text)[:length]

"""Shared utilities for campuscalm."""
from .fingerprint import fingerprint_text, short_fingerprint

__all__ = ["fingerprint_text", "short_fingerprint"]

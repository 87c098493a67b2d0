"""Business logic services for contentbridge.

Public API:
    FormatResolver - Resolve any content format from a provider
"""

from contentbridge.services.resolver import FALLBACK_ORDER, LOSSY_GATED, FormatResolver

__all__ = [
    "FALLBACK_ORDER",
    "LOSSY_GATED",
    "FormatResolver",
]

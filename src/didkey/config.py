"""
Global configuration for the did:key package.

This module contains environment-specific settings read once at import time.
"""

import os

_SUPPORTED_HIGH_S_POLICIES: list[str] = ["reject", "normalize"]

HIGH_S_POLICY = os.environ.get("DIDKEY_HIGH_S_POLICY", "reject").lower()
"""
How high-S signatures are treated when malleable signatures are disallowed.

- 'reject': a signature whose S exceeds n/2 fails verification.
- 'normalize': S is mirrored to n - S before the algebraic check.

Applies only when a call does not choose a policy explicitly.
"""

if HIGH_S_POLICY not in _SUPPORTED_HIGH_S_POLICIES:
    raise ValueError(
        f"Invalid DIDKEY_HIGH_S_POLICY environment variable: '{HIGH_S_POLICY}'. "
        f"Supported values: {_SUPPORTED_HIGH_S_POLICIES}"
    )

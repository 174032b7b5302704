# SPDX-License-Identifier: MIT
"""
Central redaction utilities for commitguard.

Every snippet that ends up in a finding, a console report or a report file
goes through these helpers so a detected secret is never re-leaked verbatim.
"""

from __future__ import annotations


def redact_secret(secret: str) -> str:
    """
    Redact secret showing first 6 + last 4 characters.

    For secrets <= 10 characters, shows only ****.
    For secrets > 10 characters, shows first6****last4.

    Args:
        secret: The secret string to redact

    Returns:
        Redacted string
    """
    if len(secret) <= 10:
        return "****"
    return secret[:6] + "****" + secret[-4:]

"""
Text helpers shared by the HTML parsers.

Pure functions with no failure modes: every input, including None and
malformed obfuscated values, maps to a string.
"""

import re
from typing import Optional

_WHITESPACE = re.compile(r"\s+")


def clean_text(text: Optional[str]) -> str:
    """
    Normalize scraped text.

    - None, "" -> ""
    - "  ABC\n  TRUCKING " -> "ABC TRUCKING"

    Args:
        text: Raw text pulled from a document

    Returns:
        Trimmed text with non-breaking spaces replaced and whitespace runs collapsed
    """
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text.replace("\u00a0", " ")).strip()


def decode_cf_email(encoded: Optional[str]) -> str:
    """
    Decode an email hidden by Cloudflare's email obfuscation.

    The value is hex: the first byte is the XOR key and each following byte,
    XORed with the key, is one character code of the address.

    Args:
        encoded: Value of a data-cfemail attribute

    Returns:
        Decoded email, or "" if the value is malformed
    """
    try:
        key = int(encoded[:2], 16)
        return "".join(
            chr(int(encoded[i:i + 2], 16) ^ key)
            for i in range(2, len(encoded), 2)
        )
    except (TypeError, ValueError):
        return ""

"""
Turn uploaded CSV bytes into text the renderer can work with.

Responsibilities:
- encoding detection + decoding
- delimiter detection
"""

from __future__ import annotations

import csv
import logging
from typing import Any, Dict, Tuple

from charset_normalizer import from_bytes

from .rules import DEFAULT_DELIMITER, SNIFF_DELIMITERS, SNIFF_SAMPLE_SIZE

logger = logging.getLogger(__name__)

_UTF8_BOM = b"\xef\xbb\xbf"


def decode_upload(raw: bytes) -> Tuple[str, Dict[str, Any]]:
    """
    Decode input bytes to text.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - If detection is uncertain, still attempt decode using best guess.
    - If decode fails, fall back to UTF-8, then to UTF-8 with replacement characters.
    - A leading UTF-8 BOM never reaches the text.
    """
    detected = None

    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    # Decode using detected encoding if available; otherwise try utf-8 first.
    decode_used = detected or "utf-8"
    if raw.startswith(_UTF8_BOM) and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    decode_fallback = False

    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        decode_fallback = True
        try:
            text = raw.decode("utf-8-sig")
            decode_used = "utf-8-sig"
        except UnicodeDecodeError:
            # Last resort: decode with replacement so rendering can continue deterministically
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"
        logger.warning("could not decode upload as %s, used %s", detected, decode_used)

    if text.startswith("\ufeff"):
        text = text[1:]

    report = {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
    }
    return text, report


def sniff_delimiter(text: str, candidates: str = "".join(SNIFF_DELIMITERS)) -> str:
    """Best-effort delimiter detection on the first few KiB; defaults to a comma."""
    sample = text[:SNIFF_SAMPLE_SIZE]
    try:
        dialect = csv.Sniffer().sniff(sample, delimiters=candidates)
    except csv.Error:
        return DEFAULT_DELIMITER
    logger.debug("sniffed delimiter %r", dialect.delimiter)
    return dialect.delimiter

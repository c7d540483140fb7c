"""Decryption with a fallback to the original text."""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


def try_decrypt(src: str, decrypt: Callable[[str], str] | None = None) -> str:
    """Decrypt ``src``; return it unchanged when decryption fails.

    Without a ``decrypt`` function the text is treated as plain and returned.
    """
    if decrypt is None:
        return src
    try:
        return decrypt(src)
    except Exception as exc:  # any cipher failure falls back to the input
        logger.info("cipher fallback: %s", exc)
        return src
"""Text normalization applied before re-decoding model output."""

from __future__ import annotations

import re

# 全角标点 -> ASCII
FULL_WIDTH_PUNCTUATION = {
    "，": ",",
    "：": ":",
    "；": ";",
    "（": "(",
    "）": ")",
    "【": "[",
    "】": "]",
    "［": "[",
    "］": "]",
    "｛": "{",
    "｝": "}",
    "“": '"',
    "”": '"',
}

_TRANSLATION = str.maketrans(FULL_WIDTH_PUNCTUATION)
_WHITESPACE_RE = re.compile(r"\s+")
# a run of commas (and the blanks between them) right before a closer
_TRAILING_COMMA_RE = re.compile(r"(?:,\s*)+([}\]])")
_REPEATED_COMMA_RE = re.compile(r",{2,}")


def clean_json(text: str) -> str:
    """
    Normalize near-JSON text produced by a model.

    Full-width punctuation becomes ASCII, whitespace runs collapse to a single
    space, trailing commas before ``}``/``]`` are dropped, repeated commas are
    merged and the result is trimmed. Total and idempotent.
    """
    if not text:
        return text or ""
    text = text.translate(_TRANSLATION)
    text = _WHITESPACE_RE.sub(" ", text)
    text = _TRAILING_COMMA_RE.sub(r"\1", text)
    text = _REPEATED_COMMA_RE.sub(",", text)
    return text.strip()

"""Tolerant ``key: value`` scanner used to salvage non-JSON payloads."""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

_QUOTE = '"'
_VALUE_STOP = frozenset('"\n,}')


def _is_key_char(ch: str) -> bool:
    return ch != _QUOTE and ch != ":" and not ch.isspace()


def _skip_space(text: str, i: int) -> int:
    n = len(text)
    while i < n and text[i].isspace():
        i += 1
    return i


def _key_run_end(text: str, i: int) -> int:
    n = len(text)
    while i < n and _is_key_char(text[i]):
        i += 1
    return i


def _value_run_end(text: str, i: int) -> int:
    n = len(text)
    while i < n and text[i] not in _VALUE_STOP:
        i += 1
    return i


def _close_quote(text: str, i: int) -> int:
    return i + 1 if i < len(text) and text[i] == _QUOTE else i


class KeyValueScanner:
    """
    Left-to-right scanner for ``"key" : "value"`` pairs in arbitrary text.

    A pair is an optional quote, a key token (no quote, whitespace or colon),
    an optional quote, blanks, ``:``, blanks, an optional quote, a value token
    (no quote, newline, comma or ``}``) and an optional closing quote. Pairs
    never overlap; text that does not form a pair is skipped.

    Every position is visited a bounded number of times, so adversarial input
    cannot trigger the backtracking blow-up a single regex would risk.
    """

    def __init__(self, text: str):
        self.text = text or ""

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        pos = 0
        n = len(self.text)
        while pos < n:
            matched, nxt = self._match_at(pos)
            if matched is not None:
                yield matched
            pos = max(nxt, pos + 1)

    def _match_at(self, start: int) -> Tuple[Optional[Tuple[str, str]], int]:
        """Try a pair at ``start``; returns the pair (or None) and where to resume."""
        text = self.text
        n = len(text)

        # outside-token: optional opening quote of the key
        key_start = start + 1 if text[start] == _QUOTE else start
        if key_start >= n or not _is_key_char(text[key_start]):
            return None, start + 1

        # in-key: the key token is maximal, no shorter prefix could be followed by ':'
        key_end = _key_run_end(text, key_start)
        sep = _skip_space(text, _close_quote(text, key_end))
        if sep >= n or text[sep] != ":":
            return None, key_end

        value = self._match_value(sep + 1)
        if value is None:
            return None, key_end
        value_start, value_end = value
        pair = (text[key_start:key_end], text[value_start:value_end])
        return pair, _close_quote(text, value_end)

    def _match_value(self, after_colon: int) -> Optional[Tuple[int, int]]:
        text = self.text
        n = len(text)
        blank_end = _skip_space(text, after_colon)

        # in-quotes / in-value, blanks consumed greedily
        begin = blank_end + 1 if blank_end < n and text[blank_end] == _QUOTE else blank_end
        end = _value_run_end(text, begin)
        if end > begin:
            return begin, end

        # give blanks back one at a time: a blank that is not a newline is itself a value
        for begin in range(blank_end - 1, after_colon - 1, -1):
            end = _value_run_end(text, begin)
            if end > begin:
                return begin, end
        return None


def scan_pairs(text: str) -> Iterator[Tuple[str, str]]:
    """Yield raw ``(key, value)`` token pairs found in ``text``, untrimmed."""
    return iter(KeyValueScanner(text))

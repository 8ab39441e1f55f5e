"""Fuzzy matching of model-supplied keys onto declared parameter names."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, Optional


def edit_distance(s1: str, s2: str) -> int:
    """Classic Levenshtein distance (insert, delete, substitute all cost 1)."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1
    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, start=1):
        current = [i]
        for j, c2 in enumerate(s2, start=1):
            if c1 == c2:
                current.append(previous[j - 1])
            else:
                current.append(min(previous[j], current[j - 1], previous[j - 1]) + 1)
        previous = current
    return previous[-1]


def within_threshold(key: str, candidate: str, distance: int) -> bool:
    return distance <= max(len(key), len(candidate)) // 2


class KeyMatcher:
    """
    Resolve a raw key to one of the declared names.

    Rules, first hit wins: case-insensitive equality, synonym lookup,
    case-insensitive containment either way, then the smallest edit distance
    not exceeding half the longer length (earliest declared name on ties).
    """

    def __init__(self, synonyms: Optional[Mapping[str, str]] = None):
        table = {alias.strip().lower(): name for alias, name in (synonyms or {}).items()}
        self.synonyms: Mapping[str, str] = MappingProxyType(table)

    def match(self, raw_key: str, declared: Iterable[str]) -> Optional[str]:
        key = (raw_key or "").strip().lower()
        if not key:
            return None
        candidates = list(declared)

        for candidate in candidates:
            if candidate.lower() == key:
                return candidate

        alias = self.synonyms.get(key)
        if alias is not None and alias in candidates:
            return alias

        for candidate in candidates:
            lowered = candidate.lower()
            if lowered and (key in lowered or lowered in key):
                return candidate

        best: Optional[str] = None
        best_distance = None
        for candidate in candidates:
            distance = edit_distance(key, candidate.lower())
            if not within_threshold(key, candidate, distance):
                continue
            if best_distance is None or distance < best_distance:
                best, best_distance = candidate, distance
        return best


def find_best_match_key(raw_key: str, declared: Iterable[str]) -> Optional[str]:
    """Match without a synonym table."""
    return KeyMatcher().match(raw_key, declared)

"""Argument recovery pipeline."""

from .cleaner import clean_json
from .coercer import auto_detect, coerce_value, fix_value
from .decoder import decode_json, decode_object, encode_json
from .fixer import ArgumentsBuilder, ParameterFixer
from .matcher import KeyMatcher, edit_distance, find_best_match_key
from .parser import ParseResult, RecoveryTier, SmartArgumentsParser, parse_arguments
from .scanner import KeyValueScanner, scan_pairs
from .validator import ParameterValidator

__all__ = [
    "clean_json",
    "decode_json",
    "decode_object",
    "encode_json",
    "KeyValueScanner",
    "scan_pairs",
    "KeyMatcher",
    "edit_distance",
    "find_best_match_key",
    "auto_detect",
    "coerce_value",
    "fix_value",
    "ParameterValidator",
    "ArgumentsBuilder",
    "ParameterFixer",
    "SmartArgumentsParser",
    "ParseResult",
    "RecoveryTier",
    "parse_arguments",
]

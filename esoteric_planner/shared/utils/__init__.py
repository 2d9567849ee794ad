"""
Utilities Package

Common utility functions and helpers.

Contents:
=========
- security: Password hashing, random secrets and JWT management
- json_repair: Best-effort parsing of LLM JSON output
- text: Russian text helpers (OCR clean-up, plural forms)

Usage:
======
    from esoteric_planner.shared.utils.security import SecurityUtils
    from esoteric_planner.shared.utils.json_repair import parse_json_array
"""

from esoteric_planner.shared.utils.security import SecurityUtils
from esoteric_planner.shared.utils.json_repair import (
    JSONRepairError,
    clean_json_response,
    fix_hashtags_array,
    parse_json_array,
    parse_json_object,
)
from esoteric_planner.shared.utils.text import clean_ocr_text, days_word

__all__ = [
    "SecurityUtils",
    "JSONRepairError",
    "clean_json_response",
    "fix_hashtags_array",
    "parse_json_array",
    "parse_json_object",
    "clean_ocr_text",
    "days_word",
]

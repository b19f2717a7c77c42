"""
Utils Package

Normalization helpers for Belarusian text.
"""

from .normalize import (
    normalize_apostrophe,
    normalize_word,
    strip_marks,
    strip_stress_marker,
    has_stress_mark,
    is_stress_mark,
    CANONICAL_APOSTROPHE,
    COMBINING_ACUTE,
    STRESS_MARKER,
)

__all__ = [
    'normalize_apostrophe',
    'normalize_word',
    'strip_marks',
    'strip_stress_marker',
    'has_stress_mark',
    'is_stress_mark',
    'CANONICAL_APOSTROPHE',
    'COMBINING_ACUTE',
    'STRESS_MARKER',
]

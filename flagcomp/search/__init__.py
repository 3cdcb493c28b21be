"""Search functionality for flag completion.

This package contains:
- canonical.py: Search token and hint extraction from the cursor word
- matching.py: Flag matching and common prefix computation
"""

from .canonical import canonicalize_cursor_word
from .matching import find_matching_flags, does_single_flag_match

__all__ = ["canonicalize_cursor_word", "find_matching_flags", "does_single_flag_match"]

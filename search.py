"""
Search Engine

Regular-expression filtering of the displayed list.

Patterns use Python re syntax and match anywhere in an entry (re.search).
Filtering returns a new list, so repeated commits narrow the current list
while a fresh fetch always starts from the full one.
"""

import re
from typing import List, Pattern, Sequence


class PatternError(ValueError):
    """Search text is not a valid regular expression"""

    def __init__(self, text: str, reason: str):
        super().__init__(f"invalid pattern {text!r}: {reason}")
        self.text = text
        self.reason = reason


def compile_pattern(text: str) -> Pattern:
    """Compile user input, raising PatternError instead of re.error"""
    try:
        return re.compile(text)
    except re.error as e:
        raise PatternError(text, str(e)) from e


def filter_items(items: Sequence[str], pattern: Pattern) -> List[str]:
    """Keep entries where the pattern is found anywhere, order preserved"""
    return [item for item in items if pattern.search(item)]

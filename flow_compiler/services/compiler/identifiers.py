"""
Identifier sanitization.

The hosting platform only accepts ASCII letters and underscores in screen
ids, field names and option ids. Digits are spelled as letters
(0 -> A, 1 -> B, ... 9 -> J); any other character is dropped.
"""
import re
import string

VALID_ID_PATTERN = re.compile(r'[A-Za-z_]*')

_ALLOWED = frozenset(string.ascii_letters + "_")
_DIGIT_LETTERS = {str(d): chr(ord('A') + d) for d in range(10)}


def is_valid_id(value: str) -> bool:
    """True if ``value`` already matches the platform charset"""
    return VALID_ID_PATTERN.fullmatch(value) is not None


def sanitize_id(value: str) -> str:
    """
    Rewrite an identifier to the platform charset.

    Args:
        value: Author-supplied identifier

    Returns:
        ``value`` unchanged when already valid, otherwise the rewritten
        identifier (possibly empty)

    Example:
        >>> sanitize_id("id_1234_abc")
        'id_BCDE_abc'
    """
    if is_valid_id(value):
        return value

    result = []
    for char in value:
        if char in _DIGIT_LETTERS:
            result.append(_DIGIT_LETTERS[char])
        elif char in _ALLOWED:
            result.append(char)
    return "".join(result)

"""
Array-Field Extractor - decomposes `name={[ {...}, {...} ]}` props.

Brackets and braces are matched with a depth-tracking scan that steps over
string literals and // or /* */ comments, so nested objects
(travelers: {...}), braces inside quoted values and anything written in a
comment never produce a false element boundary.
"""

import re
import logging
from typing import List, Optional, Tuple

from backend.editor.base import ArrayField

logger = logging.getLogger(__name__)

QUOTES = ('"', "'", '`')
PAIRS = {'{': '}', '[': ']', '(': ')'}
CLOSERS = set(PAIRS.values())


def skip_string(text: str, index: int) -> int:
    """Index just past the string literal that opens at text[index]."""
    quote = text[index]
    i = index + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '\\':
            i += 2
            continue
        if ch == quote:
            return i + 1
        i += 1
    return n


def skip_comment(text: str, index: int) -> Optional[int]:
    """Index just past a comment starting at text[index], or None if none starts there."""
    if text.startswith('//', index):
        newline = text.find('\n', index + 2)
        return len(text) if newline == -1 else newline + 1
    if text.startswith('/*', index):
        close = text.find('*/', index + 2)
        return len(text) if close == -1 else close + 2
    return None


def skip_inert(text: str, index: int) -> Optional[int]:
    """Skip a string literal or comment at index; None when neither starts there."""
    if text[index] in QUOTES:
        return skip_string(text, index)
    if text[index] == '/':
        return skip_comment(text, index)
    return None


def is_blank(text: str) -> bool:
    """True when text holds nothing but whitespace and comments."""
    i = 0
    n = len(text)
    while i < n:
        if text[i].isspace():
            i += 1
            continue
        after = skip_comment(text, i)
        if after is None:
            return False
        i = after
    return True


def find_matching(text: str, open_index: int, limit: Optional[int] = None) -> Optional[int]:
    """
    Index of the bracket closing the one at open_index.

    Returns None when the text ends first or a closer of the wrong kind
    shows up (unbalanced input).
    """
    end = len(text) if limit is None else limit
    stack = [PAIRS[text[open_index]]]
    i = open_index + 1
    while i < end:
        after = skip_inert(text, i)
        if after is not None:
            i = after
            continue
        ch = text[i]
        if ch in PAIRS:
            stack.append(PAIRS[ch])
        elif ch in CLOSERS:
            if ch != stack.pop():
                return None
            if not stack:
                return i
        i += 1
    return None


def _split(text: str, start: int, end: int) -> List[Tuple[int, int]]:
    spans: List[Tuple[int, int]] = []
    i = start
    while i < end:
        after = skip_inert(text, i)
        if after is not None:
            i = after
            continue
        ch = text[i]
        if ch == '{':
            close = find_matching(text, i, end)
            if close is None:
                logger.debug(f"[ARRAYS] Unbalanced object literal at offset {i}")
                break
            spans.append((i, close + 1))
            i = close + 1
        elif ch in ('[', '('):
            close = find_matching(text, i, end)
            if close is None:
                break
            i = close + 1
        else:
            i += 1
    return spans


def split_elements(body: str) -> List[Tuple[int, int]]:
    """Spans of the top-level object literals in an array body."""
    return _split(body, 0, len(body))


def _array_field(text: str, field_name: str, open_bracket: int, close_bracket: int) -> ArrayField:
    body_start = open_bracket + 1
    spans = _split(text, body_start, close_bracket)
    return ArrayField(
        field_name=field_name,
        body_start=body_start,
        body_end=close_bracket,
        elements=spans,
        element_texts=[text[s:e] for s, e in spans],
    )


def _field_pattern(field_name: str) -> re.Pattern:
    return re.compile(r'(?<![\w$.])' + re.escape(field_name) + r'\s*=\s*\{\s*\[')


def extract_array_field(block_text: str, field_name: str) -> Optional[ArrayField]:
    """
    Locate `field_name={[ ... ]}` inside a block.

    Returns None when the prop is absent or its brackets do not balance.
    """
    span = find_prop_span(block_text, field_name)
    if span is not None:
        match = _field_pattern(field_name).match(block_text, span[0])
        if match:
            open_bracket = match.end() - 1
            close_bracket = find_matching(block_text, open_bracket)
            if close_bracket is not None and re.match(r'\s*\}', block_text[close_bracket + 1:]):
                return _array_field(block_text, field_name, open_bracket, close_bracket)

    logger.debug(f"[ARRAYS] No '{field_name}' array prop in block")
    return None


def extract_array_key(object_text: str, key: str) -> Optional[ArrayField]:
    """
    Locate `key: [ ... ]` among the top-level keys of an object literal,
    e.g. the rows of one transport table. Offsets are relative to object_text.
    """
    pattern = re.compile(r'(?<![\w$.])' + re.escape(key) + r'\s*:\s*\[')
    # Start inside the outer brace so the scan runs at the object's own depth
    i = object_text.find('{') + 1
    n = len(object_text)
    while 0 < i < n:
        after = skip_inert(object_text, i)
        if after is not None:
            i = after
            continue
        match = pattern.match(object_text, i)
        if match:
            open_bracket = match.end() - 1
            close_bracket = find_matching(object_text, open_bracket)
            if close_bracket is None:
                return None
            return _array_field(object_text, key, open_bracket, close_bracket)
        if object_text[i] in PAIRS:
            close = find_matching(object_text, i)
            if close is None:
                return None
            i = close + 1
            continue
        i += 1
    return None


# =============================================================================
# TOP-LEVEL PROPS
# =============================================================================

def find_prop_span(block_text: str, name: str, value_limit: Optional[int] = None) -> Optional[Tuple[int, int]]:
    """
    Span of `name=value` among the block's top-level props.

    The tag is walked at depth 0, so keys and strings inside array or
    expression props are never taken for props of the block itself.
    value_limit defaults to just before the closing '/>'.
    """
    pattern = re.compile(r'(?<![\w\-.$])' + re.escape(name) + r'\s*=\s*')
    limit = len(block_text) - 2 if value_limit is None else value_limit
    n = len(block_text)
    i = 0
    while i < limit:
        after = skip_inert(block_text, i)
        if after is not None:
            i = after
            continue
        ch = block_text[i]
        if ch in PAIRS:
            close = find_matching(block_text, i)
            i = n if close is None else close + 1
            continue
        match = pattern.match(block_text, i)
        if match:
            value_start = match.end()
            if value_start >= n:
                return None
            opener = block_text[value_start]
            if opener in ('"', "'"):
                return i, skip_string(block_text, value_start)
            if opener == '{':
                close = find_matching(block_text, value_start)
                return None if close is None else (i, close + 1)
            return None
        i += 1
    return None

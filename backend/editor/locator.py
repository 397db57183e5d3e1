"""
Block Locator - finds self-closing component invocations in generated code.

A block starts at '<ComponentName' and ends at the first '/>' after it.
Components handled here never nest inside themselves, so no depth tracking
is needed at this level. An opening tag that reaches another opening of the
same component before any '/>' is malformed and is skipped.

Every call rescans the whole text; nothing is cached between calls.
"""

import re
import logging
from typing import List, Optional

from backend.editor.arrays import find_prop_span
from backend.editor.base import BlockMatch

logger = logging.getLogger(__name__)

SELF_CLOSE = "/>"
ID_PROP_PATTERN = re.compile(r'id\s*=\s*(?:\{\s*)?(["\'])(.*?)\1')


def _opening_pattern(component: str) -> re.Pattern:
    # Tag name must end here: <AirplaneSectionX is a different component
    return re.compile(r'<' + re.escape(component) + r'(?![\w$.\-])')


def find_blocks(code: str, component: str) -> List[BlockMatch]:
    """Return every well-formed <component ... /> block in document order."""
    pattern = _opening_pattern(component)
    openings = [m.start() for m in pattern.finditer(code)]
    blocks: List[BlockMatch] = []

    for i, start in enumerate(openings):
        close = code.find(SELF_CLOSE, start + len(component) + 1)
        if close == -1:
            logger.debug(f"[LOCATOR] Unterminated <{component}> at offset {start}")
            continue
        next_opening = openings[i + 1] if i + 1 < len(openings) else None
        if next_opening is not None and next_opening < close:
            logger.debug(f"[LOCATOR] <{component}> at offset {start} is not self-closed before the next one")
            continue

        end = close + len(SELF_CLOSE)
        blocks.append(BlockMatch(
            component=component,
            block_text=code[start:end],
            start=start,
            end=end,
            ordinal=len(blocks),
        ))

    return blocks


def find_block(code: str, component: str, ordinal: int) -> Optional[BlockMatch]:
    """The ordinal-th block of a component, or None when there are not that many."""
    if ordinal < 0:
        return None
    blocks = find_blocks(code, component)
    if ordinal >= len(blocks):
        return None
    return blocks[ordinal]


def count_blocks(code: str, component: str) -> int:
    return len(find_blocks(code, component))


def block_id(block: BlockMatch) -> Optional[str]:
    """Value of the block's own id prop; ids inside array props do not count."""
    span = find_prop_span(block.block_text, "id")
    if span is None:
        return None
    match = ID_PROP_PATTERN.match(block.block_text, span[0], span[1])
    return match.group(2) if match else None


def find_block_by_id(code: str, component: str, section_id: str) -> Optional[BlockMatch]:
    """The block whose id prop equals section_id."""
    for block in find_blocks(code, component):
        if block_id(block) == section_id:
            return block
    return None

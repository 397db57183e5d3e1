"""
SECTION EDITOR BASE TYPES
=========================

Positional types shared by the locator, the array-field extractor and the
splice editor, plus the result object every edit returns.

All offsets are character positions. BlockMatch offsets point into the
full source text; ArrayField offsets point into the BlockMatch's own text.

Author: Section Editor Team
Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple
from enum import Enum
import logging

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================

class EditStatus(str, Enum):
    """Outcome of a single edit call."""
    APPLIED = "applied"
    BLOCK_NOT_FOUND = "block_not_found"
    FIELD_NOT_FOUND = "field_not_found"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    MINIMUM_ELEMENTS = "minimum_elements"  # Removal would empty the array


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass(frozen=True)
class BlockMatch:
    """
    One self-closing component invocation, e.g. a single <AirplaneSection ... />.

    ordinal is the 0-based position among all blocks of the same component,
    in document order.
    """
    component: str
    block_text: str
    start: int
    end: int
    ordinal: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component": self.component,
            "start": self.start,
            "end": self.end,
            "ordinal": self.ordinal,
            "length": len(self.block_text),
        }


@dataclass
class ArrayField:
    """
    A prop whose value is an array literal of object literals.

    body_start/body_end delimit the text strictly between '[' and ']'.
    elements holds (start, end) spans of each top-level '{...}' element.
    """
    field_name: str
    body_start: int
    body_end: int
    elements: List[Tuple[int, int]] = field(default_factory=list)
    element_texts: List[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.elements)

    def body(self, block_text: str) -> str:
        return block_text[self.body_start:self.body_end]


@dataclass
class EditResult:
    """
    Result of an edit. code is always the full text to use next:
    the edited text when applied, the untouched input otherwise. The one
    exception is a section insert without a BaseTemplate, which still
    carries the added import.
    """
    code: str
    status: EditStatus
    message: str = ""

    @property
    def changed(self) -> bool:
        return self.status == EditStatus.APPLIED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "status": self.status.value,
            "changed": self.changed,
            "message": self.message,
        }


def unchanged(code: str, status: EditStatus, message: str) -> EditResult:
    """Build a no-op result and emit the diagnostic for it."""
    logger.warning(f"[SPLICE] {message}")
    return EditResult(code=code, status=status, message=message)

"""
Splice Editor - position-preserving edits of array props in generated code.

Every operation follows the same shape:

    locate block -> locate array field -> validate target -> render -> splice

Only the targeted span changes; every other character of the input comes
back byte-identical. Nothing here raises for a missing target: the input
is returned unchanged with a status saying why (see EditResult), and the
reason is logged. The plain str-returning functions are thin wrappers for
callers that only want the text.

The span primitives (update_span, remove_span, append_span) work on any
ArrayField given the absolute offset of the text it was extracted from,
so nested arrays (the rows of a transport table) are edited the same way.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from backend.editor.arrays import extract_array_field, find_prop_span, is_blank
from backend.editor.base import ArrayField, BlockMatch, EditResult, EditStatus, unchanged
from backend.editor.locator import find_block, find_block_by_id
from backend.editor.records import TravelRecord
from backend.editor.serializer import ELEMENT_INDENT, serialize_record, escape_string

logger = logging.getLogger(__name__)

# Indentation of the closing bracket in a rebuilt array body
CLOSING_INDENT = "  "
# Extra indentation of a prop added on its own line
INDENT_FOR_PROPS = "  "


# =============================================================================
# HELPERS
# =============================================================================

def _splice(code: str, start: int, end: int, replacement: str) -> str:
    return code[:start] + replacement + code[end:]


def _locate(
    code: str,
    component: str,
    field_name: str,
    section_index: int,
) -> Tuple[Optional[BlockMatch], Optional[ArrayField], Optional[EditResult]]:
    block = find_block(code, component, section_index)
    if block is None:
        return None, None, unchanged(
            code, EditStatus.BLOCK_NOT_FOUND,
            f"{component} not found at index {section_index}")

    field = extract_array_field(block.block_text, field_name)
    if field is None:
        return block, None, unchanged(
            code, EditStatus.FIELD_NOT_FOUND,
            f"Could not find {field_name} array in {component} #{section_index}")

    return block, field, None


def rebuild_body(
    element_texts: Sequence[str],
    element_indent: str = ELEMENT_INDENT,
    closing_indent: str = CLOSING_INDENT,
) -> str:
    """Array body with one element per line and the closing bracket on its own line."""
    joined = ",\n".join(element_indent + text for text in element_texts)
    return "\n" + joined + "\n" + closing_indent


def _replace_body(code: str, offset: int, field: ArrayField, body: str) -> str:
    return _splice(code, offset + field.body_start, offset + field.body_end, body)


# =============================================================================
# SPAN PRIMITIVES
# =============================================================================

def update_span(code: str, offset: int, field: ArrayField, index: int, text: str, where: str) -> EditResult:
    """Replace element index of field with text. offset is where field's text starts in code."""
    if index < 0 or index >= field.count:
        return unchanged(
            code, EditStatus.INDEX_OUT_OF_RANGE,
            f"{field.field_name} index {index} out of range ({field.count} in {where})")

    start, end = field.elements[index]
    logger.info(f"[SPLICE] Updated {field.field_name}[{index}] in {where}")
    return EditResult(_splice(code, offset + start, offset + end, text), EditStatus.APPLIED,
                      f"Updated {field.field_name}[{index}]")


def remove_span(
    code: str,
    offset: int,
    field: ArrayField,
    index: int,
    where: str,
    element_indent: str = ELEMENT_INDENT,
    closing_indent: str = CLOSING_INDENT,
) -> EditResult:
    """Drop element index of field; refuses to leave the array empty."""
    if index < 0 or index >= field.count:
        return unchanged(
            code, EditStatus.INDEX_OUT_OF_RANGE,
            f"{field.field_name} index {index} out of range ({field.count} in {where})")
    if field.count <= 1:
        return unchanged(
            code, EditStatus.MINIMUM_ELEMENTS,
            f"Cannot remove the only entry of {field.field_name} in {where}")

    remaining = [text for i, text in enumerate(field.element_texts) if i != index]
    body = rebuild_body(remaining, element_indent, closing_indent)
    logger.info(f"[SPLICE] Removed {field.field_name}[{index}] from {where}")
    return EditResult(_replace_body(code, offset, field, body), EditStatus.APPLIED,
                      f"Removed {field.field_name}[{index}]")


def append_span(
    code: str,
    offset: int,
    field: ArrayField,
    text: str,
    block_text: str,
    where: str,
    element_indent: str = ELEMENT_INDENT,
    closing_indent: str = CLOSING_INDENT,
) -> EditResult:
    """
    Append text after the last element, or make it the only element of an
    array holding nothing but whitespace and comments. block_text is the
    text field's offsets point into.
    """
    if field.count:
        insert_at = offset + field.elements[-1][1]
        new_code = _splice(code, insert_at, insert_at, ",\n" + element_indent + text)
    elif not is_blank(field.body(block_text)):
        return unchanged(
            code, EditStatus.FIELD_NOT_FOUND,
            f"{field.field_name} in {where} does not hold object literals")
    else:
        new_code = _replace_body(code, offset, field, rebuild_body([text], element_indent, closing_indent))

    logger.info(f"[SPLICE] Added {field.field_name}[{field.count}] to {where}")
    return EditResult(new_code, EditStatus.APPLIED, f"Added {field.field_name}[{field.count}]")


# =============================================================================
# INDEX-ADDRESSED EDITS
# =============================================================================

def edit_update(
    code: str,
    component: str,
    field_name: str,
    section_index: int,
    element_index: int,
    record: TravelRecord,
) -> EditResult:
    """Replace one element of the section's array with the serialized record."""
    block, field, failure = _locate(code, component, field_name, section_index)
    if failure:
        return failure
    return update_span(code, block.start, field, element_index, serialize_record(record),
                       f"{component} #{section_index}")


def edit_remove(
    code: str,
    component: str,
    field_name: str,
    section_index: int,
    element_index: int,
) -> EditResult:
    """Drop one element; refuses to leave the array empty."""
    block, field, failure = _locate(code, component, field_name, section_index)
    if failure:
        return failure
    return remove_span(code, block.start, field, element_index, f"{component} #{section_index}")


def edit_add(
    code: str,
    component: str,
    field_name: str,
    section_index: int,
    record: TravelRecord,
) -> EditResult:
    """Append the serialized record after the last element (or as the first one)."""
    block, field, failure = _locate(code, component, field_name, section_index)
    if failure:
        return failure
    return append_span(code, block.start, field, serialize_record(record), block.block_text,
                       f"{component} #{section_index}")


def update_element(code, component, field_name, section_index, element_index, record) -> str:
    return edit_update(code, component, field_name, section_index, element_index, record).code


def remove_element(code, component, field_name, section_index, element_index) -> str:
    return edit_remove(code, component, field_name, section_index, element_index).code


def add_element(code, component, field_name, section_index, record) -> str:
    return edit_add(code, component, field_name, section_index, record).code


# =============================================================================
# ID-ADDRESSED EDITS
# =============================================================================

def edit_replace_elements(
    code: str,
    component: str,
    field_name: str,
    section_id: str,
    records: Sequence[TravelRecord],
) -> EditResult:
    """Rewrite the whole array of the block with the given id."""
    block = find_block_by_id(code, component, section_id)
    if block is None:
        return unchanged(code, EditStatus.BLOCK_NOT_FOUND, f"{component} not found with id {section_id}")
    if not records:
        return unchanged(code, EditStatus.MINIMUM_ELEMENTS, f"Refusing to empty {field_name} of {section_id}")

    field = extract_array_field(block.block_text, field_name)
    if field is None:
        return unchanged(code, EditStatus.FIELD_NOT_FOUND, f"Could not find {field_name} array in {section_id}")

    body = rebuild_body([serialize_record(r) for r in records])
    logger.info(f"[SPLICE] Replaced {field_name} of {section_id} with {len(records)} entries")
    return EditResult(_replace_body(code, block.start, field, body), EditStatus.APPLIED,
                      f"Replaced {field_name} of {section_id}")


def replace_elements(code, component, field_name, section_id, records) -> str:
    return edit_replace_elements(code, component, field_name, section_id, records).code


def edit_delete_block(code: str, component: str, section_id: str) -> EditResult:
    """Remove a whole block; a block alone on its line(s) takes the line with it."""
    block = find_block_by_id(code, component, section_id)
    if block is None:
        return unchanged(code, EditStatus.BLOCK_NOT_FOUND, f"{component} not found with id {section_id}")

    start, end = block.start, block.end
    line_start = code.rfind("\n", 0, start) + 1
    line_end = code.find("\n", end)
    line_end = len(code) if line_end == -1 else line_end
    if not code[line_start:start].strip() and not code[end:line_end].strip():
        start = line_start
        end = line_end + 1 if line_end < len(code) else line_end

    logger.info(f"[SPLICE] Deleted {component} {section_id}")
    return EditResult(_splice(code, start, end, ""), EditStatus.APPLIED, f"Deleted {section_id}")


def delete_block(code, component, section_id) -> str:
    return edit_delete_block(code, component, section_id).code


# =============================================================================
# SCALAR PROPS
# =============================================================================

def _render_prop(name: str, value: Any) -> str:
    if isinstance(value, bool):
        return f"{name}={{{'true' if value else 'false'}}}"
    if isinstance(value, (int, float)):
        return f"{name}={{{value}}}"
    return f'{name}="{escape_string(str(value))}"'


def _insert_prop(block_text: str, prop: str) -> str:
    body = block_text[:-2]
    head = body.rstrip()
    trailing = body[len(head):]
    if "\n" in trailing:
        closing_indent = trailing[trailing.rfind("\n") + 1:]
        return f"{head}\n{closing_indent}{INDENT_FOR_PROPS}{prop}{trailing}/>"
    return f"{head} {prop}{trailing}/>"


def edit_block_props(code: str, component: str, section_id: str, props: Dict[str, Any]) -> EditResult:
    """
    Set scalar props (title, showTitle, direction, language, ...) on the
    block with the given id. None values are ignored.
    """
    block = find_block_by_id(code, component, section_id)
    if block is None:
        return unchanged(code, EditStatus.BLOCK_NOT_FOUND, f"{component} not found with id {section_id}")

    text = block.block_text
    applied: List[str] = []
    for name, value in props.items():
        if value is None:
            continue
        rendered = _render_prop(name, value)
        span = find_prop_span(text, name)
        if span:
            text = text[:span[0]] + rendered + text[span[1]:]
        else:
            text = _insert_prop(text, rendered)
        applied.append(name)

    logger.info(f"[SPLICE] Set props {applied} on {section_id}")
    return EditResult(_splice(code, block.start, block.end, text), EditStatus.APPLIED,
                      f"Set {', '.join(applied) or 'no'} props on {section_id}")


def update_block_props(code, component, section_id, props) -> str:
    return edit_block_props(code, component, section_id, props).code

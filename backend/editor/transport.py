"""
Transport section editing.

A transport section holds tables, and each table holds its own rows:

    <TransportSection
      tables={[
        {
          id: "table_1712345678901",
          title: "Airport transfers",
          backgroundColor: "dark-blue",
          columns: [ { key: "day", label: "Day" }, ... ],
          rows: [ { day: "1", date: "...", description: "...", carType: "..." }, ... ]
        }
      ]}
      id="user_transport_1712345678901_k3j2h1g0f"
    />

Sections are addressed by id, tables and rows by index. Rows are a nested
array inside one table literal; they go through the same span primitives as
top-level arrays, so every other table and row keeps its exact text. A row
is written in the column order of its table, followed by its note.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from backend.editor import splice
from backend.editor.arrays import extract_array_field, extract_array_key
from backend.editor.base import ArrayField, BlockMatch, EditResult, EditStatus, unchanged
from backend.editor.locator import find_block_by_id
from backend.editor.reader import ObjectLiteralError, parse_object_literal, read_record
from backend.editor.records import TransportColumn, TransportRow, TransportTable
from backend.editor.sections import SectionKind
from backend.editor.serializer import (
    ELEMENT_INDENT,
    INDENT_STEP,
    ROW_INDENT,
    serialize_transport_row,
    serialize_transport_table,
)

logger = logging.getLogger(__name__)

TRANSPORT = SectionKind("transport", "TransportSection", "tables", TransportTable)

ROWS_KEY = "rows"
COLUMNS_KEY = "columns"
# Closing bracket of a table's rows array
ROWS_CLOSING_INDENT = ELEMENT_INDENT + INDENT_STEP

RowInput = Union[TransportRow, Mapping[str, Any]]


def _coerce_row(row: RowInput) -> TransportRow:
    if isinstance(row, TransportRow):
        return row
    return TransportRow.model_validate(dict(row))


# =============================================================================
# LOCATING
# =============================================================================

def _locate_tables(code: str, section_id: str) -> Tuple[Optional[BlockMatch], Optional[ArrayField], Optional[EditResult]]:
    block = find_block_by_id(code, TRANSPORT.component, section_id)
    if block is None:
        return None, None, unchanged(
            code, EditStatus.BLOCK_NOT_FOUND, f"{TRANSPORT.component} not found with id {section_id}")

    tables = extract_array_field(block.block_text, TRANSPORT.field_name)
    if tables is None:
        return block, None, unchanged(
            code, EditStatus.FIELD_NOT_FOUND, f"Could not find tables array in {section_id}")
    return block, tables, None


def _locate_table(code: str, section_id: str, table_index: int):
    block, tables, failure = _locate_tables(code, section_id)
    if failure:
        return None, None, failure
    if table_index < 0 or table_index >= tables.count:
        return None, None, unchanged(
            code, EditStatus.INDEX_OUT_OF_RANGE,
            f"tables index {table_index} out of range ({tables.count} in {section_id})")
    return block, tables, None


def _locate_rows(code: str, section_id: str, table_index: int):
    """(absolute offset of the table, table text, rows field, failure)"""
    block, tables, failure = _locate_table(code, section_id, table_index)
    if failure:
        return None, None, None, failure

    table_text = tables.element_texts[table_index]
    rows = extract_array_key(table_text, ROWS_KEY)
    if rows is None:
        return None, None, None, unchanged(
            code, EditStatus.FIELD_NOT_FOUND,
            f"Could not find rows array in table {table_index} of {section_id}")
    return block.start + tables.elements[table_index][0], table_text, rows, None


def table_columns(table_text: str) -> List[TransportColumn]:
    """Columns declared by a table literal; unreadable ones are skipped."""
    field = extract_array_key(table_text, COLUMNS_KEY)
    if field is None:
        return []
    columns = []
    for i, text in enumerate(field.element_texts):
        try:
            columns.append(read_record(text, TransportColumn))
        except ValueError as e:
            logger.warning(f"[TRANSPORT] Skipping unreadable column {i}: {e}")
    return columns


# =============================================================================
# ROWS
# =============================================================================

def edit_update_row(code: str, section_id: str, table_index: int, row_index: int, row: RowInput) -> EditResult:
    """Replace one row, written in its table's column order."""
    row = _coerce_row(row)
    offset, table_text, rows, failure = _locate_rows(code, section_id, table_index)
    if failure:
        return failure
    text = serialize_transport_row(row, table_columns(table_text))
    return splice.update_span(code, offset, rows, row_index, text, f"{section_id} table {table_index}")


def edit_add_row(code: str, section_id: str, table_index: int, row: RowInput) -> EditResult:
    row = _coerce_row(row)
    offset, table_text, rows, failure = _locate_rows(code, section_id, table_index)
    if failure:
        return failure
    text = serialize_transport_row(row, table_columns(table_text))
    return splice.append_span(code, offset, rows, text, table_text, f"{section_id} table {table_index}",
                              ROW_INDENT, ROWS_CLOSING_INDENT)


def edit_remove_row(code: str, section_id: str, table_index: int, row_index: int) -> EditResult:
    """Drop one row; a table's last row is never removed (delete the table instead)."""
    offset, _, rows, failure = _locate_rows(code, section_id, table_index)
    if failure:
        return failure
    return splice.remove_span(code, offset, rows, row_index, f"{section_id} table {table_index}",
                              ROW_INDENT, ROWS_CLOSING_INDENT)


# =============================================================================
# TABLES
# =============================================================================

def edit_update_table(code: str, section_id: str, table_index: int, table) -> EditResult:
    """
    Rewrite a table's title, color and columns. Its id and the text of its
    existing rows are kept; rows passed in with the table are ignored.
    """
    table = TRANSPORT.coerce(table)
    block, tables, failure = _locate_table(code, section_id, table_index)
    if failure:
        return failure

    old_text = tables.element_texts[table_index]
    try:
        old_id = parse_object_literal(old_text).get("id")
    except ObjectLiteralError as e:
        return unchanged(code, EditStatus.FIELD_NOT_FOUND,
                         f"Table {table_index} of {section_id} is not an object literal: {e}")

    rendered = serialize_transport_table(table.model_copy(update={"id": old_id or table.id, "rows": []}))
    old_rows = extract_array_key(old_text, ROWS_KEY)
    if old_rows is not None and old_rows.count:
        new_rows = extract_array_key(rendered, ROWS_KEY)
        body = splice.rebuild_body(old_rows.element_texts, ROW_INDENT, ROWS_CLOSING_INDENT)
        rendered = rendered[:new_rows.body_start] + body + rendered[new_rows.body_end:]

    return splice.update_span(code, block.start, tables, table_index, rendered, section_id)


def edit_add_table(code: str, section_id: str, table) -> EditResult:
    table = TRANSPORT.coerce(table)
    block, tables, failure = _locate_tables(code, section_id)
    if failure:
        return failure
    return splice.append_span(code, block.start, tables, serialize_transport_table(table),
                              block.block_text, section_id)


def edit_remove_table(code: str, section_id: str, table_index: int) -> EditResult:
    """Drop one table; the section's last table is never removed (delete the section instead)."""
    block, tables, failure = _locate_tables(code, section_id)
    if failure:
        return failure
    return splice.remove_span(code, block.start, tables, table_index, section_id)


def list_transport_tables(code: str, section_id: str) -> List[TransportTable]:
    """Tables of a section as records; unreadable tables are skipped with a warning."""
    _, tables, failure = _locate_tables(code, section_id)
    if failure:
        return []

    records = []
    for i, text in enumerate(tables.element_texts):
        try:
            records.append(read_record(text, TransportTable))
        except ValueError as e:
            logger.warning(f"[TRANSPORT] Skipping unreadable tables[{i}] in {section_id}: {e}")
    return records


# =============================================================================
# SECTION
# =============================================================================

def edit_props(code: str, section_id: str, props: Dict[str, Any]) -> EditResult:
    return splice.edit_block_props(code, TRANSPORT.component, section_id, props)


def edit_delete(code: str, section_id: str) -> EditResult:
    return splice.edit_delete_block(code, TRANSPORT.component, section_id)


def update_transport_row(code: str, section_id: str, table_index: int, row_index: int, row) -> str:
    return edit_update_row(code, section_id, table_index, row_index, row).code


def add_transport_row(code: str, section_id: str, table_index: int, row) -> str:
    return edit_add_row(code, section_id, table_index, row).code


def remove_transport_row(code: str, section_id: str, table_index: int, row_index: int) -> str:
    return edit_remove_row(code, section_id, table_index, row_index).code


def update_transport_table(code: str, section_id: str, table_index: int, table) -> str:
    return edit_update_table(code, section_id, table_index, table).code


def add_transport_table(code: str, section_id: str, table) -> str:
    return edit_add_table(code, section_id, table).code


def remove_transport_table(code: str, section_id: str, table_index: int) -> str:
    return edit_remove_table(code, section_id, table_index).code


def update_transport_section_props(code: str, section_id: str, props: Dict[str, Any]) -> str:
    return edit_props(code, section_id, props).code


def delete_transport_section(code: str, section_id: str) -> str:
    return edit_delete(code, section_id).code


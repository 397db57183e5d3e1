"""
Transport Router - Transport Section Editing API
=================================================

Endpoints (sections by id, tables and rows by index):
- POST /api/transport/list            - Tables of a section
- POST /api/transport/rows/update     - Replace one row of a table
- POST /api/transport/rows/add        - Append a row to a table
- POST /api/transport/rows/remove     - Remove a row (never a table's last one)
- POST /api/transport/tables/update   - Set title/color/columns, keeping id and rows
- POST /api/transport/tables/add      - Append a table
- POST /api/transport/tables/remove   - Remove a table (never the last one)
- POST /api/transport/insert          - Insert a new section into BaseTemplate
- POST /api/transport/props           - Set title/showTitle/direction/language
- POST /api/transport/delete          - Delete the section

Responses and strict-mode behaviour match the sections router.
"""

import logging
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, HTTPException
from pydantic import Field

from backend.editor import inserter, transport
from backend.editor.base import EditResult
from backend.routers.sections import CodeRequest, EditResponse, _check_size, _respond, _run

logger = logging.getLogger(__name__)

router = APIRouter(tags=["transport"])


# =============================================================================
# REQUEST MODELS
# =============================================================================

class SectionRequest(CodeRequest):
    section_id: str


class RowUpdateRequest(SectionRequest):
    table_index: int = Field(0, ge=0)
    row_index: int = Field(..., ge=0)
    row: Dict[str, Any]


class RowAddRequest(SectionRequest):
    table_index: int = Field(0, ge=0)
    row: Dict[str, Any]


class RowRemoveRequest(SectionRequest):
    table_index: int = Field(0, ge=0)
    row_index: int = Field(..., ge=0)


class TableUpdateRequest(SectionRequest):
    table_index: int = Field(..., ge=0)
    table: Dict[str, Any]


class TableAddRequest(SectionRequest):
    table: Dict[str, Any]


class TableRemoveRequest(SectionRequest):
    table_index: int = Field(..., ge=0)


class InsertRequest(CodeRequest):
    tables: List[Dict[str, Any]] = Field(..., min_length=1)
    title: Optional[str] = None
    show_title: Optional[bool] = None
    direction: Optional[str] = None
    language: Optional[str] = None


class PropsRequest(SectionRequest):
    title: Optional[str] = None
    show_title: Optional[bool] = None
    direction: Optional[str] = None
    language: Optional[str] = None


# =============================================================================
# TABLES AND ROWS
# =============================================================================

@router.post("/list")
async def list_tables(request: SectionRequest):
    _check_size(request.code)
    tables = _run("List", lambda: transport.list_transport_tables(request.code, request.section_id))
    return {
        "section_id": request.section_id,
        "count": len(tables),
        "tables": [t.model_dump(by_alias=True, exclude_none=True) for t in tables],
    }


@router.post("/rows/update", response_model=EditResponse)
async def update_row(request: RowUpdateRequest):
    _check_size(request.code)
    logger.info(f"[TRANSPORT API] Update row {request.row_index} of table {request.table_index} in {request.section_id}")

    result = _run("Update row", lambda: transport.edit_update_row(
        request.code, request.section_id, request.table_index, request.row_index, request.row))
    return _respond(result)


@router.post("/rows/add", response_model=EditResponse)
async def add_row(request: RowAddRequest):
    _check_size(request.code)
    logger.info(f"[TRANSPORT API] Add row to table {request.table_index} in {request.section_id}")

    result = _run("Add row", lambda: transport.edit_add_row(
        request.code, request.section_id, request.table_index, request.row))
    return _respond(result)


@router.post("/rows/remove", response_model=EditResponse)
async def remove_row(request: RowRemoveRequest):
    _check_size(request.code)
    logger.info(f"[TRANSPORT API] Remove row {request.row_index} of table {request.table_index} in {request.section_id}")

    result = _run("Remove row", lambda: transport.edit_remove_row(
        request.code, request.section_id, request.table_index, request.row_index))
    return _respond(result)


@router.post("/tables/update", response_model=EditResponse)
async def update_table(request: TableUpdateRequest):
    _check_size(request.code)
    logger.info(f"[TRANSPORT API] Update table {request.table_index} in {request.section_id}")

    result = _run("Update table", lambda: transport.edit_update_table(
        request.code, request.section_id, request.table_index, request.table))
    return _respond(result)


@router.post("/tables/add", response_model=EditResponse)
async def add_table(request: TableAddRequest):
    _check_size(request.code)
    logger.info(f"[TRANSPORT API] Add table to {request.section_id}")

    result = _run("Add table", lambda: transport.edit_add_table(request.code, request.section_id, request.table))
    return _respond(result)


@router.post("/tables/remove", response_model=EditResponse)
async def remove_table(request: TableRemoveRequest):
    _check_size(request.code)
    logger.info(f"[TRANSPORT API] Remove table {request.table_index} from {request.section_id}")

    result = _run("Remove table", lambda: transport.edit_remove_table(
        request.code, request.section_id, request.table_index))
    return _respond(result)


# =============================================================================
# SECTION
# =============================================================================

@router.post("/insert", response_model=EditResponse)
async def insert_section(request: InsertRequest):
    """Insert a new TransportSection at the top of BaseTemplate, importing it if needed."""
    _check_size(request.code)

    def _insert() -> EditResult:
        tables = [transport.TRANSPORT.coerce(t) for t in request.tables]
        block = inserter.build_transport_section(
            tables,
            title=request.title,
            show_title=request.show_title,
            direction=request.direction,
            language=request.language,
        )
        return inserter.edit_insert_section(request.code, transport.TRANSPORT.component, block)

    logger.info(f"[TRANSPORT API] Insert TransportSection with {len(request.tables)} tables")
    return _respond(_run("Insert", _insert))


@router.post("/props", response_model=EditResponse)
async def update_props(request: PropsRequest):
    _check_size(request.code)
    if request.direction is not None and request.direction not in ("rtl", "ltr"):
        raise HTTPException(400, "direction must be 'rtl' or 'ltr'")

    props = {
        "title": request.title,
        "showTitle": request.show_title,
        "direction": request.direction,
        "language": request.language,
    }
    result = _run("Props", lambda: transport.edit_props(request.code, request.section_id, props))
    return _respond(result)


@router.post("/delete", response_model=EditResponse)
async def delete_section(request: SectionRequest):
    _check_size(request.code)
    logger.info(f"[TRANSPORT API] Delete TransportSection {request.section_id}")

    result = _run("Delete", lambda: transport.edit_delete(request.code, request.section_id))
    return _respond(result)

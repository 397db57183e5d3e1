"""
Sections Router - Flight / Hotel Section Editing API
=====================================================

Endpoints ({kind} is "flights" or "hotels"):
- POST /api/sections/{kind}/update  - Replace one entry of a section
- POST /api/sections/{kind}/remove  - Remove one entry (never the last one)
- POST /api/sections/{kind}/add     - Append an entry
- POST /api/sections/{kind}/list    - Read a section's entries
- POST /api/sections/{kind}/replace - Rewrite all entries of a section (by id)
- POST /api/sections/{kind}/insert  - Insert a new section into BaseTemplate
- POST /api/sections/{kind}/delete  - Delete a section (by id)
- POST /api/sections/{kind}/props   - Set title/showTitle/direction/... (by id)

Every edit returns the full code. When nothing could be changed the code
comes back untouched with changed=false and a status saying why, unless
EDITOR_STRICT_MODE is on, in which case the no-op is an HTTP error.

Used by: Document editor modals, template preview
"""

import logging
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field, ValidationError

from config import AppConfig, is_strict_mode
from backend.editor import sections, inserter
from backend.editor.base import EditResult, EditStatus
from backend.editor.sections import SectionKind

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sections"])


# =============================================================================
# REQUEST/RESPONSE MODELS
# =============================================================================

class CodeRequest(BaseModel):
    """Base for every request carrying the template code."""
    code: str


class UpdateRequest(CodeRequest):
    section_index: int = Field(0, ge=0)
    element_index: int = Field(..., ge=0)
    record: Dict[str, Any]


class RemoveRequest(CodeRequest):
    section_index: int = Field(0, ge=0)
    element_index: int = Field(..., ge=0)


class AddRequest(CodeRequest):
    section_index: int = Field(0, ge=0)
    record: Dict[str, Any]


class ListRequest(CodeRequest):
    section_index: int = Field(0, ge=0)


class ReplaceRequest(CodeRequest):
    section_id: str
    records: List[Dict[str, Any]]


class InsertRequest(CodeRequest):
    records: List[Dict[str, Any]] = Field(..., min_length=1)
    title: Optional[str] = None
    show_title: Optional[bool] = None
    notice_message: Optional[str] = None
    show_notice: Optional[bool] = None
    direction: Optional[str] = None
    language: Optional[str] = None


class DeleteRequest(CodeRequest):
    section_id: str


class PropsRequest(CodeRequest):
    section_id: str
    title: Optional[str] = None
    show_title: Optional[bool] = None
    direction: Optional[str] = None
    language: Optional[str] = None


class EditResponse(BaseModel):
    """Result of an edit."""
    success: bool
    code: str
    changed: bool
    status: str
    message: str = ""


# =============================================================================
# HELPERS
# =============================================================================

STRICT_STATUS_CODES = {
    EditStatus.BLOCK_NOT_FOUND: 404,
    EditStatus.FIELD_NOT_FOUND: 404,
    EditStatus.INDEX_OUT_OF_RANGE: 404,
    EditStatus.MINIMUM_ELEMENTS: 409,
}


def _kind(kind: str) -> SectionKind:
    section_kind = sections.get_section_kind(kind)
    if not section_kind:
        raise HTTPException(404, f"Unknown section kind '{kind}'. Use one of: {', '.join(sections.SECTION_KINDS)}")
    return section_kind


def _check_size(code: str):
    limit = AppConfig.MAX_CODE_SIZE_KB * 1024
    if len(code.encode('utf-8')) > limit:
        raise HTTPException(413, f"Code exceeds {AppConfig.MAX_CODE_SIZE_KB} KB")


def _respond(result: EditResult) -> EditResponse:
    if not result.changed and is_strict_mode():
        raise HTTPException(STRICT_STATUS_CODES.get(result.status, 400), result.message)
    return EditResponse(
        success=True,
        code=result.code,
        changed=result.changed,
        status=result.status.value,
        message=result.message,
    )


def _run(label: str, operation):
    """Run an editor call, mapping record errors to 422 and surprises to 500."""
    try:
        return operation()
    except HTTPException:
        raise
    except ValidationError as e:
        raise HTTPException(422, e.errors(include_url=False, include_context=False))
    except ValueError as e:
        raise HTTPException(400, str(e))
    except Exception as e:
        logger.error(f"[SECTIONS API] {label} failed: {e}")
        raise HTTPException(500, f"{label} failed: {str(e)}")


# =============================================================================
# INDEX-ADDRESSED EDITS
# =============================================================================

@router.post("/{kind}/update", response_model=EditResponse)
async def update_entry(kind: str, request: UpdateRequest):
    """Replace entry element_index of section section_index."""
    section_kind = _kind(kind)
    _check_size(request.code)
    logger.info(f"[SECTIONS API] Update {kind}[{request.element_index}] in section {request.section_index}")

    result = _run("Update", lambda: sections.edit_update(
        section_kind, request.code, request.section_index, request.element_index, request.record))
    return _respond(result)


@router.post("/{kind}/remove", response_model=EditResponse)
async def remove_entry(kind: str, request: RemoveRequest):
    """Remove entry element_index; a section's last entry is never removed."""
    section_kind = _kind(kind)
    _check_size(request.code)
    logger.info(f"[SECTIONS API] Remove {kind}[{request.element_index}] from section {request.section_index}")

    result = _run("Remove", lambda: sections.edit_remove(
        section_kind, request.code, request.section_index, request.element_index))
    return _respond(result)


@router.post("/{kind}/add", response_model=EditResponse)
async def add_entry(kind: str, request: AddRequest):
    section_kind = _kind(kind)
    _check_size(request.code)
    logger.info(f"[SECTIONS API] Add {kind} entry to section {request.section_index}")

    result = _run("Add", lambda: sections.edit_add(
        section_kind, request.code, request.section_index, request.record))
    return _respond(result)


@router.post("/{kind}/list")
async def list_entries(kind: str, request: ListRequest):
    """Entries of one section as camelCase dicts."""
    section_kind = _kind(kind)
    _check_size(request.code)

    records = _run("List", lambda: sections.list_records(section_kind, request.code, request.section_index))
    return {
        "kind": kind,
        "section_index": request.section_index,
        "count": len(records),
        kind: [r.model_dump(by_alias=True, exclude_none=True) for r in records],
    }


# =============================================================================
# ID-ADDRESSED EDITS
# =============================================================================

@router.post("/{kind}/replace", response_model=EditResponse)
async def replace_entries(kind: str, request: ReplaceRequest):
    section_kind = _kind(kind)
    _check_size(request.code)
    logger.info(f"[SECTIONS API] Replace {kind} of {request.section_id} with {len(request.records)} entries")

    result = _run("Replace", lambda: sections.edit_replace(
        section_kind, request.code, request.section_id, request.records))
    return _respond(result)


@router.post("/{kind}/insert", response_model=EditResponse)
async def insert_section(kind: str, request: InsertRequest):
    """Insert a new section at the top of BaseTemplate, importing it if needed."""
    section_kind = _kind(kind)
    _check_size(request.code)

    def _insert() -> EditResult:
        records = [section_kind.coerce(r) for r in request.records]
        block = inserter.build_section_block(
            section_kind.component,
            section_kind.field_name,
            records,
            title=request.title,
            show_title=request.show_title,
            notice_message=request.notice_message if section_kind is sections.FLIGHTS else None,
            show_notice=request.show_notice if section_kind is sections.FLIGHTS else None,
            direction=request.direction,
            language=request.language,
        )
        return inserter.edit_insert_section(request.code, section_kind.component, block)

    logger.info(f"[SECTIONS API] Insert {section_kind.component} with {len(request.records)} entries")
    return _respond(_run("Insert", _insert))


@router.post("/{kind}/delete", response_model=EditResponse)
async def delete_section(kind: str, request: DeleteRequest):
    section_kind = _kind(kind)
    _check_size(request.code)
    logger.info(f"[SECTIONS API] Delete {section_kind.component} {request.section_id}")

    result = _run("Delete", lambda: sections.edit_delete(section_kind, request.code, request.section_id))
    return _respond(result)


@router.post("/{kind}/props", response_model=EditResponse)
async def update_section_props(kind: str, request: PropsRequest):
    section_kind = _kind(kind)
    _check_size(request.code)
    if request.direction is not None and request.direction not in ("rtl", "ltr"):
        raise HTTPException(400, "direction must be 'rtl' or 'ltr'")

    props = {
        "title": request.title,
        "showTitle": request.show_title,
        "direction": request.direction,
        "language": request.language,
    }
    result = _run("Props", lambda: sections.edit_props(section_kind, request.code, request.section_id, props))
    return _respond(result)

"""
Code Router - Generated Component Cleanup and Inspection
=========================================================

Endpoints:
- POST /api/code/clean      - Strip fences, fix template imports, ensure React import/export
- POST /api/code/validate   - Structural check of a generated component
- POST /api/code/components - Component name, used components, imports, section counts

Used by: Template generation flow, code preview page
"""

import logging
from typing import Any
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from config import AppConfig
from backend.editor import SECTION_KINDS, TRANSPORT, count_blocks
from backend.utils import gpt_code

logger = logging.getLogger(__name__)

router = APIRouter(tags=["code"])


# =============================================================================
# REQUEST/RESPONSE MODELS
# =============================================================================

class CleanRequest(BaseModel):
    """Raw generator output: a code string or a response object holding one."""
    response: Any


class CodeRequest(BaseModel):
    code: str


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/clean")
async def clean_code(request: CleanRequest):
    code = gpt_code.parse_gpt_response(request.response)
    if code is None:
        raise HTTPException(400, "No code found in generator response")
    if len(code.encode('utf-8')) > AppConfig.MAX_CODE_SIZE_KB * 1024:
        raise HTTPException(413, f"Code exceeds {AppConfig.MAX_CODE_SIZE_KB} KB")

    cleaned = gpt_code.clean_jsx_code(code)
    validation = gpt_code.validate_jsx_structure(cleaned)
    logger.info(f"[CODE API] Cleaned {len(code)} chars -> {len(cleaned)} chars, valid={validation.is_valid}")

    return {
        "success": True,
        "code": cleaned,
        "component_name": gpt_code.extract_component_name(cleaned),
        "validation": validation.to_dict(),
    }


@router.post("/validate")
async def validate_code(request: CodeRequest):
    validation = gpt_code.validate_jsx_structure(request.code)
    return validation.to_dict()


@router.post("/components")
async def describe_components(request: CodeRequest):
    """What the component is made of, including how many editable sections it has."""
    return {
        "component_name": gpt_code.extract_component_name(request.code),
        "imports": gpt_code.extract_imports(request.code),
        "used_components": gpt_code.extract_used_components(request.code),
        "props": gpt_code.extract_props(request.code),
        "sections": {
            kind.component: count_blocks(request.code, kind.component)
            for kind in [*SECTION_KINDS.values(), TRANSPORT]
        },
    }

"""
Health Router - Section Editor Diagnostics
===========================================

Endpoint: GET /api/health
Optional: ?verbose=true for configuration summary and editor self-check

Register in main.py: app.include_router(health.router, prefix="/api")
"""

import time
import logging
from datetime import datetime, timezone
from typing import Any, Dict
from fastapi import APIRouter, Query

from config import AppConfig

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

SELF_CHECK_CODE = """<AirplaneSection
  flights={[
    {
      date: "2024-01-01",
      fromAirport: "A",
      toAirport: "B",
      travelers: {
        adults: 1,
        children: 0,
        infants: 0
      },
      luggage: "20kg"
    }
  ]}
/>"""


def check_editor_health() -> Dict[str, Any]:
    """Run one add/remove cycle against a tiny section."""
    result = {"status": "unknown", "latency_ms": None, "details": {}}
    start = time.time()

    try:
        from backend.editor import FLIGHTS, sections

        flight = sections.list_flights(SELF_CHECK_CODE, 0)[0]
        added = sections.edit_add(FLIGHTS, SELF_CHECK_CODE, 0, flight)
        removed = sections.edit_remove(FLIGHTS, added.code, 0, 1)

        result["details"]["add"] = added.status.value
        result["details"]["remove"] = removed.status.value
        result["details"]["round_trip"] = len(sections.list_flights(removed.code, 0)) == 1
        result["status"] = "healthy" if added.changed and removed.changed else "degraded"
    except Exception as e:
        logger.error(f"[HEALTH] Editor self-check failed: {e}")
        result["status"] = "error"
        result["details"]["error"] = str(e)

    result["latency_ms"] = int((time.time() - start) * 1000)
    return result


@router.get("/health")
async def health(verbose: bool = Query(False)):
    editor = check_editor_health()
    response = {
        "status": "healthy" if editor["status"] == "healthy" else "degraded",
        "version": AppConfig.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": {"editor": editor["status"] == "healthy"},
    }
    if verbose:
        valid, errors = AppConfig.validate_config()
        response["editor"] = editor
        response["config"] = AppConfig.get_config_summary()
        response["config_valid"] = valid
        response["config_errors"] = errors
    return response

"""
Section Editor FastAPI Backend
Main application entry point

Routers:
- /api/sections/{kind}/...  flight and hotel section editing
- /api/transport/...        transport table and row editing
- /api/code/...             generated component cleanup and inspection
- /api/health               diagnostics
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config import AppConfig
from backend.routers import sections, transport, code, health

logging.basicConfig(
    level=getattr(logging, AppConfig.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(title=AppConfig.APP_NAME, version=AppConfig.APP_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=AppConfig.CORS_ORIGINS,
    allow_credentials=False,  # Must be False when using wildcard
    allow_methods=["*"],
    allow_headers=["*"],
)

valid, config_errors = AppConfig.validate_config()
for error in config_errors:
    logger.warning(f"[STARTUP] Config: {error}")

# Register routers
app.include_router(sections.router, prefix="/api/sections", tags=["sections"])
logger.info("Sections router registered at /api/sections")

app.include_router(transport.router, prefix="/api/transport", tags=["transport"])
logger.info("Transport router registered at /api/transport")

app.include_router(code.router, prefix="/api/code", tags=["code"])
logger.info("Code router registered at /api/code")

app.include_router(health.router, prefix="/api", tags=["health"])
logger.info("Health router registered at /api/health")


@app.get("/api/debug/routes")
async def debug_routes():
    """List all registered API routes, including those of included routers."""
    routes = []
    for path, operations in app.openapi().get("paths", {}).items():
        routes.append({
            'path': path,
            'methods': sorted(method.upper() for method in operations),
            'name': next(iter(operations.values()), {}).get('operationId')
        })
    return {"total": len(routes), "routes": sorted(routes, key=lambda x: x['path'])}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

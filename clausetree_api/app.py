"""
FastAPI application exposing clause-tree validation.

Main responsibilities:
- Validate generator responses against a passage's tokens
- Report fatal analysis errors as structured 422 responses
- Expose liveness and readiness checks

Run locally (example):

    python -m clausetree_api.app

which serves on API_HOST:API_PORT and reloads on change when DEBUG is set.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clausetree.errors import SyntaxAnalysisError
from clausetree.logging_config import get_logger, setup_logging
from clausetree.settings import get_settings
from clausetree_api.middleware import setup_security
from clausetree_api.models import AnalysisErrorResponse
from clausetree_api.routes import health_router, syntax_router

# ---------------------------------------------------------------------------
# Logging & app setup
# ---------------------------------------------------------------------------

settings = get_settings()
setup_logging(level=settings.log_level, use_colors=settings.is_development)
logger = get_logger("api")

app = FastAPI(title="Clause Tree API", version=settings.app_version, debug=settings.debug)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
setup_security(app)

app.include_router(health_router, prefix="/api")
app.include_router(syntax_router, prefix="/api")


@app.exception_handler(SyntaxAnalysisError)
async def syntax_analysis_error_handler(request: Request, exc: SyntaxAnalysisError) -> JSONResponse:
    """Turn a fatal analysis error into a 422 with its structured detail."""
    logger.warning(f"Analysis rejected ({exc.code}): {exc.user_message}")
    body = AnalysisErrorResponse(error=exc.code, message=exc.user_message, details=exc.details)
    return JSONResponse(status_code=422, content=body.model_dump())


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "clausetree_api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )

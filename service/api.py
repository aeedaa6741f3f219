"""
service/api.py
--------------
Lightweight FastAPI service layer for the tweet segmenter.

Exposes:
    GET  /health                                       →  service configuration
    POST /split  { "text": str } | { "resource": str } →  ThreadResponse

Segmentation is pure and synchronous, so the service holds no state beyond
the module-level defaults from app.py. A request may carry the text itself
or a resource (http(s) URL or literal text). Unlike the CLI, the service never
reads files from its own disk: a path sent as a resource is segmented as
literal text.

Run with:
    uvicorn service.api:app --host 0.0.0.0 --port 8000

The CLI entry point (app.py) and the Streamlit UI are not affected.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from app import (
    split_pipeline,
    resolve_measurer,
    BUDGET,
    PREFIX_TEMPLATE,
    SUFFIX_TEMPLATE,
    MEASURER,
    FETCH_TIMEOUT,
)
from segmenter.logging_config import get_logger
from segmenter.sources        import read_param, read_remote, resolve_text
from validator.thread_validator import ValidationError

log = get_logger(__name__)

# request resources never reach the server filesystem
SERVICE_ORIGINS = {
    "remote": read_remote,
    "param":  read_param,
}


# ── Request models ─────────────────────────────────────────────────────────────

class SplitRequest(BaseModel):
    """Input schema for the /split endpoint."""
    text:     Optional[str] = None
    resource: Optional[str] = None
    budget:   int           = Field(default=BUDGET, gt=0)
    prefix:   str           = PREFIX_TEMPLATE
    suffix:   Optional[str] = None
    measure:  str           = MEASURER


# ── Lifespan ──────────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Logs service start and stop; there is nothing to preload."""
    log.info(
        "Service startup - budget=%d measurer=%s prefix=%r",
        BUDGET, MEASURER, PREFIX_TEMPLATE,
    )
    yield
    log.info("Service shutdown")


# ── FastAPI app ────────────────────────────────────────────────────────────────

app = FastAPI(
    title       = "Tweet Segmenter API",
    description = (
        "Splits text into numbered chunks that fit a short-message budget. "
        "Words are never cut."
    ),
    version  = "1.0.0",
    lifespan = lifespan,
)


# ── Endpoints ──────────────────────────────────────────────────────────────────

@app.get("/health", tags=["ops"])
def health_check():
    """Liveness check reporting the default segmentation settings."""
    return {
        "status":          "ok",
        "budget":          BUDGET,
        "measurer":        MEASURER,
        "prefix_template": PREFIX_TEMPLATE,
    }


@app.post("/split", tags=["segmenter"])
def split(request: SplitRequest):
    """
    Segment a text (or a resolved resource) into a labeled thread.

    Raises:
        422 Unprocessable Entity: if neither or both of text/resource are set,
                                  or the measurer is unknown
        500 Internal Server Error: if the output fails schema validation
    """
    if (request.text is None) == (request.resource is None):
        raise HTTPException(
            status_code=422, detail="Provide exactly one of 'text' or 'resource'."
        )

    try:
        measure = resolve_measurer(request.measure)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    if request.resource is not None:
        log.info("POST /split - resolving resource '%.80s'", request.resource)
        text = resolve_text(
            request.resource, timeout=FETCH_TIMEOUT, origins=SERVICE_ORIGINS,
        )
    else:
        text = request.text

    try:
        response = split_pipeline(
            text,
            budget          = request.budget,
            prefix_template = request.prefix,
            suffix_template = SUFFIX_TEMPLATE if request.suffix is None else request.suffix,
            use_suffix      = request.suffix is not None,
            measure         = measure,
        )
    except ValidationError as exc:
        log.error("POST /split failed - validation error: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    log.info("POST /split complete - %d chunk(s)", response["count"])
    return response

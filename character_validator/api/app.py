"""FastAPI application and routes."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional, List

from fastapi import FastAPI, HTTPException, Query, UploadFile, File, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from character_validator import __version__
from character_validator.config import ConfigLoader, ConfigLoadError, SystemConfig
from character_validator.schema import Valid, parse_and_validate
from character_validator.services import (
    COMMON_ISSUES,
    ValidationInProgress,
    ValidationSession,
    build_report,
)
from character_validator.viewer import render_html

logger = logging.getLogger(__name__)

WEB_DIR = Path(__file__).resolve().parent.parent / "web"
templates = Jinja2Templates(directory=str(WEB_DIR / "templates"))


# Global state
app_state = {
    "system_config": None,
    "session": None,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown logic."""
    logger.info("Starting Character Validator...")

    loader = ConfigLoader()
    # main.run_server pre-seeds the config when started with --config
    system_config = app_state["system_config"]
    if system_config is None:
        try:
            system_config = loader.load_system_config()
        except ConfigLoadError as e:
            logger.error(f"{e}")
            logger.warning("Falling back to default system config")
            system_config = SystemConfig()

    session = ValidationSession(system_config, loader)
    try:
        session.load_sample()
        logger.info(f"✓ Loaded sample '{session.file_name}' (valid: {session.is_valid})")
    except ConfigLoadError as e:
        logger.warning(f"⚠ Could not load sample character: {e}")

    app_state["system_config"] = system_config
    app_state["session"] = session

    yield

    logger.info("Shutting down Character Validator")
    app_state["session"] = None
    app_state["system_config"] = None


app = FastAPI(
    title="Character Validator",
    description="Validate character configuration files and browse the result",
    version=__version__,
    lifespan=lifespan,
)


def get_session() -> ValidationSession:
    session = app_state["session"]
    if session is None:
        raise HTTPException(status_code=503, detail="Validator is still starting up")
    return session


# Response models

class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    file_name: Optional[str] = None
    valid: Optional[bool] = None


class FieldErrorResponse(BaseModel):
    """A single validation error."""
    path: str
    message: str
    code: str


class ReportEntryResponse(BaseModel):
    """A validation error rephrased for display."""
    field: str
    message: str
    suggestion: Optional[str] = None
    path: str
    code: str


class ValidateResponse(BaseModel):
    """Result of a stateless validation."""
    valid: bool
    file_name: Optional[str] = None
    data: Optional[dict] = None
    errors: List[FieldErrorResponse] = []
    report: List[ReportEntryResponse] = []


async def _read_upload(file: UploadFile) -> bytes:
    if not file.filename:
        raise HTTPException(status_code=400, detail="No file selected")
    return await file.read()


# Routes

@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Check system health."""
    session = app_state["session"]
    return HealthResponse(
        status="ok",
        version=__version__,
        file_name=session.file_name if session else None,
        valid=session.is_valid if session and session.outcome else None,
    )


@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Render the result page for the current session."""
    session = get_session()
    tree_html = render_html(session.tree) if session.tree is not None else None
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "session": session,
            "summary": session.summary,
            "report": session.report,
            "tree_html": tree_html,
            "common_issues": COMMON_ISSUES,
        },
    )


@app.post("/upload")
async def upload_character(file: UploadFile = File(...)):
    """Validate an uploaded character file and show the result page."""
    session = get_session()
    content = await _read_upload(file)
    try:
        session.load_content(file.filename, content)
    except ValidationInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
    return RedirectResponse(url="/", status_code=303)


@app.post("/sample")
async def reload_sample():
    """Reload the sample character file."""
    session = get_session()
    try:
        session.load_sample()
    except ValidationInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ConfigLoadError as e:
        raise HTTPException(status_code=500, detail=f"Failed to load sample: {e}")
    return RedirectResponse(url="/", status_code=303)


@app.post("/tree/toggle")
async def toggle_node(path: str = Query("")):
    """Expand or collapse one node of the data tree."""
    session = get_session()
    try:
        expanded = session.toggle(path)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"No tree node at path '{path}'")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.debug(f"Toggled '{path or '<root>'}' -> {'expanded' if expanded else 'collapsed'}")
    return RedirectResponse(url="/", status_code=303)


@app.post("/api/validate", response_model=ValidateResponse)
async def validate_upload(file: UploadFile = File(...)):
    """
    Validate an uploaded character file without touching the page state.

    Always answers 200; the ``valid`` flag tells the outcome.
    """
    content = await _read_upload(file)
    system_config = app_state["system_config"] or SystemConfig()
    outcome = parse_and_validate(content, system_config.validation)

    if isinstance(outcome, Valid):
        return ValidateResponse(valid=True, file_name=file.filename, data=outcome.data)

    return ValidateResponse(
        valid=False,
        file_name=file.filename,
        errors=[FieldErrorResponse(**error.to_dict()) for error in outcome.errors],
        report=[
            ReportEntryResponse(**entry.to_dict())
            for entry in build_report(outcome.errors, group=system_config.viewer.group_errors_by_path)
        ],
    )


# === Static Files ===
static_dir = WEB_DIR / "static"
if static_dir.exists():
    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

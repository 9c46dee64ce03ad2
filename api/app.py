"""Main FastAPI application for the cloze question editor."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.config import LOG_LEVEL
from api.database import init_db
from api.routes import editors, questions
from api.services.cleanup_service import schedule_editor_cleanup
from api.services.editor_service import clear_editors
from core.logging_setup import setup_console_logging

setup_console_logging(LOG_LEVEL)

app = FastAPI(title="Cloze Authoring API")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# Startup events
@app.on_event("startup")
def startup_events() -> None:
    """Initialize database and schedule editor cleanup on startup."""
    init_db()
    schedule_editor_cleanup()


@app.on_event("shutdown")
def shutdown_events() -> None:
    """Discard open editors; unsaved work is never persisted."""
    clear_editors()


@app.get("/api/health")
def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


# Include routers
app.include_router(editors.router)
app.include_router(questions.router)
